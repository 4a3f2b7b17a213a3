from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Tuple


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Status changes offered by the back-office; storage itself accepts any status
ORDER_STATUS_TRANSITIONS: Dict[str, Tuple[str, ...]] = {
    OrderStatus.PENDING.value: (OrderStatus.PROCESSING.value, OrderStatus.CANCELLED.value),
    OrderStatus.PROCESSING.value: (OrderStatus.SHIPPED.value, OrderStatus.CANCELLED.value),
    OrderStatus.SHIPPED.value: (OrderStatus.DELIVERED.value,),
    OrderStatus.DELIVERED.value: (),
    OrderStatus.CANCELLED.value: (),
}


def can_transition(current: str, new: str) -> bool:
    return new in ORDER_STATUS_TRANSITIONS.get(current, ())


def next_statuses(status: str) -> List[str]:
    return [s.value for s in OrderStatus if can_transition(status, s.value)]


# Shipping address captured at checkout
class Address(BaseModel):
    full_name: str = Field(min_length=1)
    street_address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    country: str = Field(min_length=1)
    phone_number: str = Field(min_length=1)


class InsertOrder(BaseModel):
    user_id: int
    status: str = OrderStatus.PENDING.value
    total: float
    shipping_address: Address


class Order(InsertOrder):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: Optional[datetime] = None


class InsertOrderItem(BaseModel):
    order_id: int
    product_id: int
    quantity: int
    price: float


class OrderItem(InsertOrderItem):
    model_config = ConfigDict(from_attributes=True)

    id: int


# One cart line as submitted at checkout
class CheckoutLine(BaseModel):
    product_id: int
    quantity: int = Field(ge=1)
    price: float = Field(ge=0)


# Input schema for creating a new order
class OrderCreatePayload(BaseModel):
    user_id: int
    shipping_address: Address
    cart_items: List[CheckoutLine] = Field(min_length=1)


# Output schema representing the full order details
class OrderDetail(Order):
    items: List[OrderItem]
    next_statuses: List[str]


# Schema for updating order status
class OrderStatusPatch(BaseModel):
    status: OrderStatus
