# backend/schemas/product.py
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Fields the catalog owner supplies when creating a product
class InsertProduct(ORMBase):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: float = Field(ge=0)
    original_price: Optional[float] = Field(default=None, ge=0)
    image_urls: List[str] = Field(default_factory=list)
    category: str = Field(min_length=1)
    stock: int = Field(default=0, ge=0)
    featured: bool = False
    is_on_sale: bool = False
    is_new: bool = False


# Schema for partial product updates
class ProductUpdate(ORMBase):
    """All fields optional; only the ones sent are merged into the stored product."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    image_urls: Optional[List[str]] = None
    category: Optional[str] = Field(None, min_length=1)
    stock: Optional[int] = Field(None, ge=0)
    featured: Optional[bool] = None
    is_on_sale: Optional[bool] = None
    is_new: Optional[bool] = None

    # Omitting a field leaves it untouched; sending null for a required one is an error
    @field_validator("name", "price", "image_urls", "category", "stock", "featured", "is_on_sale", "is_new")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


# Full product record as kept by storage
class Product(InsertProduct):
    id: int
    rating: float = 0
    review_count: int = 0
    created_at: Optional[datetime] = None
