"""
Orders and order line items
"""
from sqlalchemy import CheckConstraint, Column, DateTime, DECIMAL, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from storefront.core.database import Base


class Order(Base):
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint("payment_method IN ('UPI', 'COD')", name="ck_orders_payment_method"),
        CheckConstraint(
            "payment_status IN ('pending', 'completed', 'failed')",
            name="ck_orders_payment_status",
        ),
        CheckConstraint(
            "order_status IN ('processing', 'shipped', 'delivered', 'cancelled')",
            name="ck_orders_order_status",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    total_amount = Column(DECIMAL(12, 2), nullable=False)

    # Shipping address snapshot
    shipping_name = Column(String(255))
    shipping_email = Column(String(255))
    shipping_address = Column(Text)

    payment_method = Column(String(10), nullable=False, default="UPI", server_default="UPI")
    payment_status = Column(String(20), nullable=False, default="pending", server_default="pending")
    order_status = Column(String(20), nullable=False, default="processing", server_default="processing", index=True)
    upi_transaction_id = Column(String(255))

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="orders")
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")


class OrderItem(Base):
    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_items_quantity_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    # Weak reference: deleting a product keeps the snapshot below
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), index=True)

    # Product data at time of sale
    name = Column(String(100), nullable=False)
    price = Column(String(50), nullable=False)
    image = Column(Text)

    quantity = Column(Integer, nullable=False)

    order = relationship("Order", back_populates="items")
