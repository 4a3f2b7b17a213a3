# backend/utils/cart.py
"""
Shopping cart aggregation.

The cart is an ordered list of line items, unique by product id. Every
mutation is mirrored to a key-value store under ``CART_KEY`` as a JSON array,
so a cart can be rebuilt from its store at any time.
"""
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from config import settings
from schemas.cart import CartItem, CartSummary
from utils.pricing import SHIPPING_COST, calc_subtotal, calc_tax

logger = logging.getLogger(__name__)

CART_KEY = "cart"

_items_adapter = TypeAdapter(List[CartItem])


class MemoryStore:
    """Process-local key-value store."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """Key-value store kept in a single JSON object on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        # ValueError covers both JSON and UTF-8 decode failures
        except (OSError, ValueError) as e:
            logger.error("Failed to read key-value file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")


class Cart:
    def __init__(self, store=None, tax_rate: Optional[float] = None):
        self.store = store if store is not None else MemoryStore()
        self.tax_rate = settings.TAX_RATE if tax_rate is None else tax_rate
        self._items: List[CartItem] = self._load()

    def _load(self) -> List[CartItem]:
        raw = self.store.get(CART_KEY)
        if not raw:
            return []
        try:
            items = _items_adapter.validate_json(raw)
        except ValidationError as e:
            logger.error("Failed to parse stored cart: %s", e)
            return []

        # Coalesce duplicates a hand-edited store may contain
        merged: List[CartItem] = []
        for item in items:
            existing = self._find(merged, item.product_id)
            if existing is not None:
                existing.quantity += item.quantity
            else:
                merged.append(item)
        return merged

    def _save(self) -> None:
        self.store.set(CART_KEY, _items_adapter.dump_json(self._items).decode())

    @staticmethod
    def _find(items: List[CartItem], product_id: int) -> Optional[CartItem]:
        return next((it for it in items if it.product_id == product_id), None)

    @property
    def items(self) -> List[CartItem]:
        return [it.model_copy() for it in self._items]

    def add(self, item: CartItem) -> CartItem:
        existing = self._find(self._items, item.product_id)
        if existing is not None:
            existing.quantity += item.quantity
            logger.info("Cart quantity updated: product_id=%s quantity=%s", item.product_id, existing.quantity)
            line = existing
        else:
            line = item.model_copy()
            self._items.append(line)
            logger.info("Cart item added: product_id=%s quantity=%s", item.product_id, item.quantity)
        self._save()
        return line.model_copy()

    def remove(self, product_id: int) -> bool:
        before = len(self._items)
        self._items = [it for it in self._items if it.product_id != product_id]
        removed = len(self._items) != before
        if removed:
            logger.info("Cart item removed: product_id=%s", product_id)
        self._save()
        return removed

    def set_quantity(self, product_id: int, quantity: int) -> None:
        if quantity < 1:
            self.remove(product_id)
            return

        existing = self._find(self._items, product_id)
        if existing is not None:
            existing.quantity = quantity
        self._save()

    def clear(self) -> None:
        self._items = []
        logger.info("Cart cleared")
        self._save()

    def total_items(self) -> int:
        return sum(it.quantity for it in self._items)

    def subtotal(self) -> float:
        return calc_subtotal(self._items)

    def tax(self) -> float:
        return calc_tax(self.subtotal(), self.tax_rate)

    def total(self) -> float:
        return self.subtotal() + self.tax()

    def summary(self) -> CartSummary:
        subtotal = self.subtotal()
        tax = self.tax()
        return CartSummary(
            items=self.items,
            total_items=self.total_items(),
            subtotal=round(subtotal, 2),
            tax_rate=self.tax_rate,
            tax=round(tax, 2),
            shipping=SHIPPING_COST,
            total=round(subtotal + tax + SHIPPING_COST, 2),
        )

    def __len__(self) -> int:
        return len(self._items)
