# backend/routes/orders.py
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from config import settings
from schemas.order import (
    InsertOrder, InsertOrderItem, Order, OrderCreatePayload, OrderDetail,
    OrderStatus, OrderStatusPatch, next_statuses,
)
from schemas.product import ProductUpdate
from storage.base import Storage
from utils.audit import write_log
from utils.deps import get_storage
from utils.pricing import calc_subtotal, calc_total

router = APIRouter(prefix="/api/orders", tags=["Orders"])
logger = logging.getLogger(__name__)


def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


# Map a stored order and its lines to the detail schema
def _order_to_out(storage: Storage, order: Order) -> OrderDetail:
    return OrderDetail(
        **order.model_dump(),
        items=storage.get_order_items(order.id),
        next_statuses=next_statuses(order.status),
    )


@router.get("", response_model=List[Order])
def list_orders(
    status: Optional[OrderStatus] = Query(None, description="Filter by order status"),
    storage: Storage = Depends(get_storage),
):
    orders = storage.get_all_orders()
    if status:
        orders = [o for o in orders if o.status == status.value]
    return orders


@router.get("/{order_id}", response_model=OrderDetail)
def get_order(order_id: int, storage: Storage = Depends(get_storage)):
    order = storage.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return _order_to_out(storage, order)


@router.post("", response_model=Order, status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderCreatePayload, request: Request, storage: Storage = Depends(get_storage)):
    """
    Checkout: records the order and its lines, then deducts stock.

    The stored total includes tax: round(subtotal * (1 + TAX_RATE), 2),
    shipping being free.

    Lines are written one by one with no rollback, so a failure midway leaves
    the order partially recorded and stock partially deducted.
    """
    subtotal = calc_subtotal(payload.cart_items)
    total = round(calc_total(subtotal, settings.TAX_RATE), 2)

    try:
        order = storage.create_order(InsertOrder(
            user_id=payload.user_id,
            status=OrderStatus.PENDING.value,
            total=total,
            shipping_address=payload.shipping_address,
        ))

        for line in payload.cart_items:
            storage.create_order_item(InsertOrderItem(
                order_id=order.id,
                product_id=line.product_id,
                quantity=line.quantity,
                price=line.price,
            ))

            # Deduct stock, never below zero; unknown products are skipped
            product = storage.get_product(line.product_id)
            if product:
                storage.update_product(product.id, ProductUpdate(stock=max(0, product.stock - line.quantity)))
            else:
                logger.warning("Order %s references unknown product %s", order.id, line.product_id)
    except Exception as e:
        logger.exception("Failed to create order for user %s: %s", payload.user_id, e)
        raise HTTPException(status_code=500, detail=f"Failed to create order: {e}")

    write_log(
        user_id=payload.user_id, action="ORDER_CREATE", resource="orders", ip=_client_ip(request),
        meta={"order_id": order.id, "lines": len(payload.cart_items), "total": total},
    )
    return order


# Back-office status change; transitions are not enforced here
@router.put("/{order_id}/status", response_model=Order)
def update_order_status(
    order_id: int,
    payload: OrderStatusPatch,
    request: Request,
    storage: Storage = Depends(get_storage),
):
    existing = storage.get_order(order_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Order not found")

    order = storage.update_order_status(order_id, payload.status.value)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    write_log(
        action="ORDER_STATUS_CHANGE", resource="orders", ip=_client_ip(request),
        meta={"order_id": order_id, "old": existing.status, "new": order.status},
    )
    return order
