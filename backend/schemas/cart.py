from pydantic import BaseModel, Field
from typing import List

# A single product/quantity pairing in the shopping cart
class CartItem(BaseModel):
    product_id: int
    name: str = ""
    price: float = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    image_url: str = ""

# Request schema for pricing a cart
class CartIn(BaseModel):
    items: List[CartItem] = Field(default_factory=list)

# Response schema for the entire cart summary
class CartSummary(BaseModel):
    items: List[CartItem]
    total_items: int
    subtotal: float
    tax_rate: float
    tax: float
    shipping: float
    total: float
