"""
Product catalog table
"""
from sqlalchemy import ARRAY, CheckConstraint, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from storefront.core.database import Base


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (
        # Order placement relies on this as the last guard against overselling
        CheckConstraint("current_inventory >= 0", name="ck_products_inventory_non_negative"),
        CheckConstraint("cardinality(categories) > 0", name="ck_products_has_category"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(String(50), nullable=False)  # decimal kept as text
    image = Column(Text, nullable=False)
    categories = Column(ARRAY(String(100)), nullable=False)
    brand = Column(String(255), nullable=False, default="", server_default="")
    current_inventory = Column(Integer, nullable=False, default=0)
    sku = Column(String(100), unique=True)  # NULLs don't collide
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
