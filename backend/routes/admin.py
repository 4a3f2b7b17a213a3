# backend/routes/admin.py
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from schemas.order import OrderStatus
from storage.base import Storage
from utils.deps import get_storage

router = APIRouter(prefix="/api/admin", tags=["Admin"])

# Threshold for low stock alert
LOW_STOCK_THRESHOLD = 10


class StatsSummary(BaseModel):
    total_revenue: float
    total_orders: int
    pending_orders: int
    total_products: int
    low_stock_products: int
    total_users: int


# Dashboard summary for the back-office
@router.get("/stats", response_model=StatsSummary)
def get_stats_summary(storage: Storage = Depends(get_storage)):
    orders = storage.get_all_orders()
    products = storage.get_all_products()

    return StatsSummary(
        total_revenue=round(sum(o.total for o in orders), 2),
        total_orders=len(orders),
        pending_orders=sum(1 for o in orders if o.status == OrderStatus.PENDING.value),
        total_products=len(products),
        low_stock_products=sum(1 for p in products if p.stock < LOW_STOCK_THRESHOLD),
        total_users=len(storage.get_all_users()),
    )
