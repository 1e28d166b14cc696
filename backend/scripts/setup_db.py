#!/usr/bin/env python3
"""
Script: setup_db.py
Purpose: Prepare a fresh Storefront database

This script:
1. Creates the users, products, orders and order_items tables (if missing)
2. Creates the admin account (if no user has that email)
3. Seeds the bundled catalog (if the products table is empty)

Usage:
    cd backend
    python scripts/setup_db.py [--admin-email EMAIL] [--admin-password PASSWORD] [--skip-seed]
"""

import argparse
import logging
import sys
from pathlib import Path

# Add backend to path
BACKEND_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BACKEND_DIR))

from dotenv import load_dotenv

load_dotenv(BACKEND_DIR / '.env')

from storefront import models
from storefront.core.auth import hash_password
from storefront.core.database import Base, SessionLocal, engine
from storefront.services.inventory_service import InventoryService

logger = logging.getLogger("setup_db")

DEFAULT_ADMIN_EMAIL = "admin@store.com"
DEFAULT_ADMIN_PASSWORD = "admin123"


def create_tables():
    logger.info("Creating tables...")
    Base.metadata.create_all(bind=engine)
    logger.info(f"Tables ready: {', '.join(sorted(Base.metadata.tables))}")


def ensure_admin(email: str, password: str, name: str = "Admin") -> bool:
    """Create the admin user unless the email is taken. Returns True if created."""
    session = SessionLocal()
    try:
        existing = session.query(models.User).filter(models.User.email == email.lower()).first()
        if existing is not None:
            logger.info(f"Admin {email} already exists (role={existing.role})")
            return False

        session.add(models.User(
            name=name,
            email=email.lower(),
            password_hash=hash_password(password),
            role="admin",
        ))
        session.commit()
        logger.info(f"Created admin {email}")
        return True
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def seed_catalog() -> int:
    inserted = InventoryService().seed()
    if inserted:
        logger.info(f"Seeded {inserted} products")
    else:
        logger.info("Catalog already seeded")
    return inserted


def main():
    parser = argparse.ArgumentParser(description="Create tables, admin user and starter catalog")
    parser.add_argument("--admin-email", default=DEFAULT_ADMIN_EMAIL)
    parser.add_argument("--admin-password", default=DEFAULT_ADMIN_PASSWORD)
    parser.add_argument("--skip-seed", action="store_true", help="Don't load the starter catalog")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    create_tables()
    ensure_admin(args.admin_email, args.admin_password)
    if not args.skip_seed:
        seed_catalog()


if __name__ == "__main__":
    main()
