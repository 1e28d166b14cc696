"""
Inventory Service
Catalog management: product CRUD, categories and seeding
"""
import logging
from typing import List, Optional

from storefront.core.errors import NotFoundError, ValidationError
from storefront.data.inventory import INVENTORY
from storefront.domain.product import Product, ProductCreate, ProductUpdate
from storefront.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)

REQUIRED_PRODUCT_FIELDS = ('name', 'description', 'price', 'image', 'categories', 'current_inventory')


class InventoryService:
    """
    Service for the product catalog

    Handles:
    - Listing (optionally by category) and lookup
    - Admin create / update / delete
    - Distinct category listing
    - Seeding the bundled catalog into an empty store
    """

    def __init__(self, product_repo: ProductRepository = None):
        self.product_repo = product_repo or ProductRepository()

    def list_products(self, category: Optional[str] = None) -> List[Product]:
        return self.product_repo.find_all(category=category)

    def get_product(self, product_id: int) -> Product:
        product = self.product_repo.find_by_id(product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def list_categories(self) -> List[str]:
        """Distinct categories across the catalog, in first-seen order"""
        categories: List[str] = []
        for product_categories in self.product_repo.get_category_lists():
            for category in product_categories:
                if category not in categories:
                    categories.append(category)
        return categories

    def create_product(self, data: ProductCreate) -> Product:
        values = data.model_dump()
        missing = [f for f in REQUIRED_PRODUCT_FIELDS if values.get(f) in (None, '', [])]
        if missing:
            raise ValidationError()

        if values['current_inventory'] < 0:
            raise ValidationError("Inventory cannot be negative")

        values['brand'] = values.get('brand') or ''
        if not values.get('sku'):
            values.pop('sku', None)

        product = self.product_repo.create(values)
        logger.info(f"Product {product.id} created: {product.name}")
        return product

    def update_product(self, data: ProductUpdate) -> Product:
        if data.id is None:
            raise ValidationError("Product ID is required")

        changes = data.changes()
        for field in ('name', 'description', 'price', 'image', 'categories'):
            if field in changes and not changes[field]:
                raise ValidationError(f"{field} cannot be empty")
        if 'current_inventory' in changes and changes['current_inventory'] is None:
            raise ValidationError("currentInventory cannot be empty")
        if 'brand' in changes and changes['brand'] is None:
            changes['brand'] = ''
        # Unique column: blank means no SKU
        if 'sku' in changes and not changes['sku']:
            changes['sku'] = None

        product = self.product_repo.update(data.id, changes)
        if product is None:
            raise NotFoundError("Product not found")

        logger.info(f"Product {product.id} updated: {sorted(changes)}")
        return product

    def delete_product(self, product_id: Optional[int]) -> None:
        if product_id is None:
            raise ValidationError("Product ID is required")

        if not self.product_repo.delete(product_id):
            raise NotFoundError("Product not found")

        logger.info(f"Product {product_id} deleted")

    def seed(self) -> int:
        """
        Insert the bundled catalog if the store has no products

        Returns:
            Number of products inserted (0 when already seeded)
        """
        if self.product_repo.count() > 0:
            return 0

        inserted = self.product_repo.create_many(INVENTORY)
        logger.info(f"Seeded {inserted} products")
        return inserted
