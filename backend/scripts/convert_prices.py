#!/usr/bin/env python3
"""
Script: convert_prices.py
Purpose: Rewrite catalog prices from USD to INR

Prices are matched exactly against a fixed USD -> INR table (1 USD = 83 INR).
Products whose price is not in the table are reported and left unchanged.

Usage:
    cd backend
    python scripts/convert_prices.py [--dry-run]

Options:
    --dry-run    Show what would be changed without writing
"""

import argparse
import os
import sys
from pathlib import Path

import psycopg2
from psycopg2.extras import RealDictCursor

BACKEND_DIR = Path(__file__).parent.parent

from dotenv import load_dotenv

load_dotenv(BACKEND_DIR / '.env')

DATABASE_URL = os.getenv("DATABASE_URL")

USD_TO_INR = {
    '1000': '83000',
    '800': '66400',
    '900': '74700',
    '1200': '99600',
    '500': '41500',
    '650': '53950',
    '1230': '102090',
    '300': '24900',
    '825': '68475',
    '720': '59760',
    '2000': '166000',
    '1100': '91300',
    '600': '49800',
    '775': '64325',
    '1600': '132800',
    '550': '45650',
}


def plan_conversions(products):
    """Split products into (id, name, old, new) updates and unmapped prices"""
    updates = []
    unmapped = []
    for product in products:
        new_price = USD_TO_INR.get(product['price'].strip())
        if new_price is None:
            unmapped.append(product)
        else:
            updates.append((product['id'], product['name'], product['price'], new_price))
    return updates, unmapped


def main():
    parser = argparse.ArgumentParser(description="Convert product prices from USD to INR")
    parser.add_argument("--dry-run", action="store_true", help="Show changes without writing")
    args = parser.parse_args()

    if not DATABASE_URL:
        print("DATABASE_URL environment variable is required")
        sys.exit(1)

    conn = psycopg2.connect(DATABASE_URL, cursor_factory=RealDictCursor)
    try:
        cursor = conn.cursor()
        cursor.execute("SELECT id, name, price FROM products ORDER BY id")
        updates, unmapped = plan_conversions(cursor.fetchall())

        for product_id, name, old, new in updates:
            print(f"  {name}: {old} -> {new}")
        for product in unmapped:
            print(f"  {product['name']}: no mapping for {product['price']}, skipped")

        if args.dry_run:
            print(f"\n[DRY RUN] Would update {len(updates)} products")
            return

        for product_id, _, _, new in updates:
            cursor.execute("UPDATE products SET price = %s WHERE id = %s", (new, product_id))
        conn.commit()
        print(f"\nUpdated {len(updates)} products")

    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


if __name__ == "__main__":
    main()
