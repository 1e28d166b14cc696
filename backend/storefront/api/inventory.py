"""
Inventory API Endpoints
Public catalog browsing plus admin product management
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status
from pydantic import BaseModel

from storefront.core.auth import TokenUser, require_admin
from storefront.domain.product import ProductCreate, ProductUpdate
from storefront.services.inventory_service import InventoryService

router = APIRouter(prefix="/api", tags=["Inventory"])


class ProductRef(BaseModel):
    id: Optional[int] = None


def get_inventory_service() -> InventoryService:
    return InventoryService()


@router.get("/inventory")
def list_inventory(
    category: Optional[str] = Query(None, description="Only products tagged with this category"),
    service: InventoryService = Depends(get_inventory_service),
):
    """All products, newest first"""
    products = service.list_products(category=category)
    return {"success": True, "products": [p.to_dict() for p in products]}


@router.get("/categories")
def list_categories(service: InventoryService = Depends(get_inventory_service)):
    return {"success": True, "categories": service.list_categories()}


@router.post("/inventory", status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    service: InventoryService = Depends(get_inventory_service),
    _admin: TokenUser = Depends(require_admin),
):
    product = service.create_product(payload)
    return {
        "success": True,
        "message": "Product created successfully",
        "product": product.to_dict(),
    }


@router.put("/inventory")
def update_product(
    payload: ProductUpdate,
    service: InventoryService = Depends(get_inventory_service),
    _admin: TokenUser = Depends(require_admin),
):
    product = service.update_product(payload)
    return {
        "success": True,
        "message": "Product updated successfully",
        "product": product.to_dict(),
    }


@router.delete("/inventory")
def delete_product(
    payload: Optional[ProductRef] = Body(None),
    service: InventoryService = Depends(get_inventory_service),
    _admin: TokenUser = Depends(require_admin),
):
    service.delete_product(payload.id if payload else None)
    return {"success": True, "message": "Product deleted successfully"}


# Must be registered before /products/{product_id}
@router.get("/products/seed")
def seed_products(
    service: InventoryService = Depends(get_inventory_service),
    _admin: TokenUser = Depends(require_admin),
):
    """Load the bundled catalog into an empty store"""
    inserted = service.seed()
    if inserted == 0:
        return {"success": True, "message": "Database already seeded"}
    return {"success": True, "message": f"Seeded {inserted} products successfully"}


@router.get("/products/{product_id}")
def get_product(product_id: int, service: InventoryService = Depends(get_inventory_service)):
    product = service.get_product(product_id)
    return {"success": True, "product": product.to_dict()}
