"""
Order Domain Models

Represents orders, their line items and the status state machines.
These are the single source of truth for order data structure.
"""
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from storefront.domain.product import Product, price_to_text


class PaymentMethod(str, Enum):
    UPI = "UPI"
    COD = "COD"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class OrderStatus(str, Enum):
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Allowed transitions; anything not listed is rejected
ORDER_STATUS_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

PAYMENT_STATUS_TRANSITIONS: Dict[PaymentStatus, FrozenSet[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.COMPLETED, PaymentStatus.FAILED}),
    PaymentStatus.FAILED: frozenset({PaymentStatus.PENDING}),
    PaymentStatus.COMPLETED: frozenset(),
}


def can_transition_order(current: OrderStatus, new: OrderStatus) -> bool:
    return new in ORDER_STATUS_TRANSITIONS[current]


def can_transition_payment(current: PaymentStatus, new: PaymentStatus) -> bool:
    return new in PAYMENT_STATUS_TRANSITIONS[current]


_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShippingAddress(BaseModel):
    """Shipping address snapshot stored with the order"""
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class OrderItem(BaseModel):
    """
    Order Item domain model - one line of an order

    name, price and image are copied from the catalog when the order is
    placed so order history stays stable if the product is edited or
    deleted later. product_id is a weak reference (NULL once the product
    is gone); product holds the live record when the item is populated.
    """

    id: int = Field(..., description="Order item ID")
    order_id: int = Field(..., description="Parent order ID")
    product_id: Optional[int] = Field(None, description="Product catalog ID")
    name: str = Field(..., description="Product name at order time")
    price: str = Field(..., description="Unit price at order time (decimal text)")
    quantity: int = Field(..., description="Quantity ordered", ge=1)
    image: Optional[str] = Field(None, description="Image at order time")

    # Populated from the product catalog (optional)
    product: Optional[Product] = Field(None, description="Current product record")

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    @property
    def line_total(self) -> Optional[Decimal]:
        """price x quantity, or None when the stored price is not numeric"""
        try:
            return Decimal(self.price) * self.quantity
        except InvalidOperation:
            return None

    def to_dict(self) -> dict:
        data = self.model_dump(by_alias=True, exclude={'product'})
        data['product'] = self.product.to_dict() if self.product else None
        return data


class Order(BaseModel):
    """
    Order domain model - represents a customer order

    Fields:
        id: Internal order ID (primary key)
        user_id: Owning user

        # Financial information
        total_amount: Order total as submitted by the client
        payment_method: UPI or COD
        upi_transaction_id: Reference from the UPI provider, once paid

        # Status tracking
        payment_status: pending, completed or failed
        order_status: processing, shipped, delivered or cancelled

        # Snapshot
        shipping_address: name / email / address at order time

        # Dates
        created_at: When order was placed
        updated_at: When order was last updated

        # Order items (one-to-many relationship)
        items: Line items in submission order
    """

    id: int = Field(..., description="Internal order ID")
    user_id: int = Field(..., description="Owning user ID")

    total_amount: Decimal = Field(..., description="Order total", ge=0)
    shipping_address: ShippingAddress = Field(default_factory=ShippingAddress)
    payment_method: PaymentMethod = Field(PaymentMethod.UPI, description="Payment method")
    payment_status: PaymentStatus = Field(PaymentStatus.PENDING, description="Payment status")
    order_status: OrderStatus = Field(OrderStatus.PROCESSING, description="Order status")
    upi_transaction_id: Optional[str] = Field(None, description="UPI transaction reference")

    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    items: List[OrderItem] = Field(default_factory=list, description="Order items")

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    # Computed properties
    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def computed_total(self) -> Optional[Decimal]:
        """Sum of line totals; None if any stored price is not numeric"""
        totals = [item.line_total for item in self.items]
        if any(t is None for t in totals):
            return None
        return sum(totals, Decimal('0'))

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.COMPLETED

    @property
    def is_cancelled(self) -> bool:
        return self.order_status == OrderStatus.CANCELLED

    def to_dict(self) -> dict:
        """
        Convert to dictionary with computed fields

        Keys are camelCase as sent to clients.
        """
        data = self.model_dump(by_alias=True, mode='json', exclude={'items', 'total_amount'})

        data['totalAmount'] = float(self.total_amount)
        data['itemCount'] = self.item_count
        data['totalQuantity'] = self.total_quantity
        data['items'] = [item.to_dict() for item in self.items]

        return data


class OrderItemCreate(BaseModel):
    """A requested line item as submitted by the client"""
    product_id: int = Field(..., alias="product")
    name: Optional[str] = None
    price: Optional[str] = None
    quantity: int
    image: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('price', mode='before')
    @classmethod
    def normalize_price(cls, value):
        return price_to_text(value)

    @property
    def display_name(self) -> str:
        """Name used in client-facing messages"""
        return self.name or str(self.product_id)


class OrderCreate(BaseModel):
    """
    Schema for placing a new order

    Top-level fields are optional so that the order service reports missing
    ones with its own validation error.
    """
    items: Optional[List[OrderItemCreate]] = None
    total_amount: Optional[Decimal] = None
    shipping_address: Optional[ShippingAddress] = None
    payment_method: Optional[PaymentMethod] = None

    model_config = _CAMEL


class OrderStatusUpdate(BaseModel):
    order_status: OrderStatus

    model_config = _CAMEL


class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatus
    upi_transaction_id: Optional[str] = None

    model_config = _CAMEL
