# backend/routes/categories.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, status

from schemas.category import Category, InsertCategory
from storage.base import Storage
from utils.audit import write_log
from utils.deps import get_storage

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", response_model=List[Category])
def list_categories(storage: Storage = Depends(get_storage)):
    return storage.get_all_categories()


@router.post("", response_model=Category, status_code=status.HTTP_201_CREATED)
def create_category(payload: InsertCategory, request: Request, storage: Storage = Depends(get_storage)):
    # Category names are unique
    if storage.get_category_by_name(payload.name):
        raise HTTPException(status_code=400, detail="Category already exists")

    category = storage.create_category(payload)
    write_log(
        action="CATEGORY_CREATE", resource="categories",
        ip=request.client.host if request.client else None,
        meta={"category_id": category.id, "name": category.name},
    )
    return category


@router.get("/{category_id}", response_model=Category)
def get_category(category_id: int, storage: Storage = Depends(get_storage)):
    category = storage.get_category(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category
