"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities.
These models enforce type safety and validation across the application.
"""
from storefront.domain.product import Product, ProductCreate, ProductUpdate
from storefront.domain.order import (
    Order,
    OrderItem,
    OrderCreate,
    OrderItemCreate,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingAddress,
)
from storefront.domain.user import User, UserRole

__all__ = [
    'Product', 'ProductCreate', 'ProductUpdate',
    'Order', 'OrderItem', 'OrderCreate', 'OrderItemCreate',
    'OrderStatus', 'PaymentMethod', 'PaymentStatus', 'ShippingAddress',
    'User', 'UserRole',
]
