# backend/routes/users.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, status

from schemas.order import Order
from schemas.user import InsertUser, UserCreate, UserResponse
from storage.base import Storage
from utils.audit import write_log
from utils.deps import get_storage
from utils.hashing import get_password_hash

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=List[UserResponse])
def list_users(storage: Storage = Depends(get_storage)):
    return storage.get_all_users()


# Register a user record mirrored from the identity provider
@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, request: Request, storage: Storage = Depends(get_storage)):
    normalized_email = payload.email.strip().lower()
    if storage.get_user_by_email(normalized_email):
        raise HTTPException(status_code=400, detail="Email already registered")
    if payload.firebase_id and storage.get_user_by_firebase_id(payload.firebase_id):
        raise HTTPException(status_code=400, detail="Firebase account already registered")

    data = payload.model_dump(exclude={"password", "email"})
    password_hash = get_password_hash(payload.password) if payload.password else None
    user = storage.create_user(InsertUser(email=normalized_email, password_hash=password_hash, **data))

    write_log(
        user_id=user.id, action="USER_CREATE", resource="users",
        ip=request.client.host if request.client else None, meta={"email": user.email},
    )
    return user


@router.get("/firebase/{firebase_id}", response_model=UserResponse)
def get_user_by_firebase_id(firebase_id: str, storage: Storage = Depends(get_storage)):
    user = storage.get_user_by_firebase_id(firebase_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, storage: Storage = Depends(get_storage)):
    user = storage.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


# Order history of a single user
@router.get("/{user_id}/orders", response_model=List[Order])
def list_user_orders(user_id: int, storage: Storage = Depends(get_storage)):
    return storage.get_orders_by_user(user_id)
