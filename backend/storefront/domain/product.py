"""
Product Domain Model

Represents a catalog product and its live inventory count.
This is the single source of truth for product data structure.
"""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def price_to_text(value: Any) -> Any:
    """Prices are stored as text; accept numbers from clients and normalize them"""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return value


class Product(BaseModel):
    """
    Product domain model - represents a product in the catalog

    Fields:
        id: Internal product ID (primary key)
        name: Product name
        description: Product description
        price: Unit price, decimal kept as text (e.g. "83000")
        image: Image URL or path
        categories: Category tags (at least one)
        brand: Brand name (may be empty)
        current_inventory: Units in stock, never negative
        sku: Optional stock keeping unit, unique when present
        created_at: When product was created
    """

    id: int = Field(..., description="Internal product ID")
    name: str = Field(..., description="Product name", max_length=100)
    description: str = Field("", description="Product description")
    price: str = Field(..., description="Unit price as decimal text")
    image: str = Field(..., description="Image URL")
    categories: List[str] = Field(default_factory=list, description="Category tags")
    brand: str = Field("", description="Brand name")
    current_inventory: int = Field(0, description="Units in stock", ge=0)
    sku: Optional[str] = Field(None, description="Stock keeping unit")
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @property
    def is_out_of_stock(self) -> bool:
        return self.current_inventory <= 0

    def has_stock_for(self, quantity: int) -> bool:
        return self.current_inventory >= quantity

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dict with camelCase keys"""
        data = self.model_dump(by_alias=True)
        data['isOutOfStock'] = self.is_out_of_stock
        if isinstance(data.get('createdAt'), datetime):
            data['createdAt'] = data['createdAt'].isoformat()
        return data


class ProductCreate(BaseModel):
    """
    Schema for creating a new product

    Every field is optional at the schema level so that a missing field is
    reported with the catalog's own message instead of a schema error.
    """
    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    price: Optional[str] = None
    image: Optional[str] = None
    categories: Optional[List[str]] = None
    brand: Optional[str] = None
    current_inventory: Optional[int] = None
    sku: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator('price', mode='before')
    @classmethod
    def normalize_price(cls, value):
        return price_to_text(value)


class ProductUpdate(BaseModel):
    """Schema for updating an existing product"""
    id: Optional[int] = None
    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    price: Optional[str] = None
    image: Optional[str] = None
    categories: Optional[List[str]] = None
    brand: Optional[str] = None
    current_inventory: Optional[int] = Field(None, ge=0)
    sku: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator('price', mode='before')
    @classmethod
    def normalize_price(cls, value):
        return price_to_text(value)

    def changes(self) -> dict:
        """Fields explicitly provided by the client, excluding the id"""
        return self.model_dump(exclude_unset=True, exclude={'id'})
