# backend/routes/cart.py
from fastapi import APIRouter

from schemas.cart import CartIn, CartSummary
from utils.cart import Cart

router = APIRouter(prefix="/api/cart", tags=["Cart"])


# Price a client-held cart; duplicate product ids are merged
@router.post("/summary", response_model=CartSummary)
def cart_summary(payload: CartIn):
    cart = Cart()
    for item in payload.items:
        cart.add(item)
    return cart.summary()
