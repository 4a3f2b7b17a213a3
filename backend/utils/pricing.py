# backend/utils/pricing.py
from typing import Iterable

# Shipping is free on every order
SHIPPING_COST = 0.0


def line_total(price: float, quantity: int) -> float:
    return price * quantity


def calc_subtotal(lines: Iterable) -> float:
    """Sum of price * quantity over anything carrying those two attributes."""
    return sum(line_total(line.price, line.quantity) for line in lines)


def calc_tax(subtotal: float, rate: float) -> float:
    return subtotal * rate


def calc_total(subtotal: float, rate: float) -> float:
    return subtotal + calc_tax(subtotal, rate) + SHIPPING_COST
