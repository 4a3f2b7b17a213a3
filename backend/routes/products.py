# backend/routes/products.py
from typing import List, Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from schemas.product import InsertProduct, Product, ProductUpdate
from storage.base import Storage
from utils.audit import write_log
from utils.catalog import filter_products
from utils.deps import get_storage

router = APIRouter(prefix="/api/products", tags=["Products"])


def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


# =========================
# PRODUCT LIST
# =========================
@router.get("", response_model=List[Product])
def list_products(
    filter: Optional[Literal["featured", "new", "sale"]] = Query(None, description="Merchandising flag"),
    category: Optional[List[str]] = Query(None, description="One or more category names"),
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    min_rating: Optional[float] = Query(None, ge=0, le=5),
    q: Optional[str] = Query(None, description="Search in name and description"),
    sort: Literal["featured", "price-low", "price-high", "rating", "newest"] = "featured",
    storage: Storage = Depends(get_storage),
):
    return filter_products(
        storage.get_all_products(),
        flag=filter,
        categories=category,
        min_price=min_price,
        max_price=max_price,
        min_rating=min_rating,
        q=q,
        sort=sort,
    )


@router.get("/{product_id}", response_model=Product)
def get_product(product_id: int, storage: Storage = Depends(get_storage)):
    product = storage.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(payload: InsertProduct, request: Request, storage: Storage = Depends(get_storage)):
    product = storage.create_product(payload)
    write_log(
        action="PRODUCT_CREATE", resource="products", ip=_client_ip(request),
        meta={"product_id": product.id, "name": product.name},
    )
    return product


# Partial update: only fields present in the body are merged
@router.put("/{product_id}", response_model=Product)
def update_product(
    product_id: int, payload: ProductUpdate, request: Request, storage: Storage = Depends(get_storage)
):
    product = storage.update_product(product_id, payload)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    write_log(
        action="PRODUCT_UPDATE", resource="products", ip=_client_ip(request),
        meta={"product_id": product_id, "fields": sorted(payload.model_fields_set)},
    )
    return product


@router.delete("/{product_id}")
def delete_product(product_id: int, request: Request, storage: Storage = Depends(get_storage)):
    if not storage.delete_product(product_id):
        raise HTTPException(status_code=404, detail="Product not found")

    write_log(action="PRODUCT_DELETE", resource="products", ip=_client_ip(request), meta={"product_id": product_id})
    return {"success": True}
