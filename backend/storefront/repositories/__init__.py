"""
Repository Layer - Data Access

This layer handles all database queries and returns domain models.
Repositories abstract away SQL details from business logic.
"""
from storefront.repositories.product_repository import ProductRepository
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.user_repository import UserRepository

__all__ = [
    'ProductRepository',
    'OrderRepository',
    'UserRepository',
]
