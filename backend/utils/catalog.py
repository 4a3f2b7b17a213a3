# backend/utils/catalog.py
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from schemas.product import Product

SORT_OPTIONS = ("featured", "price-low", "price-high", "rating", "newest")
FLAG_FILTERS = {"featured": "featured", "new": "is_new", "sale": "is_on_sale"}

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _created_key(product: Product) -> datetime:
    ts = product.created_at
    if ts is None:
        return _EPOCH
    # SQLite hands back naive timestamps
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def filter_products(
    products: Sequence[Product],
    *,
    flag: Optional[str] = None,
    categories: Optional[Sequence[str]] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    min_rating: Optional[float] = None,
    q: Optional[str] = None,
    sort: str = "featured",
) -> List[Product]:
    """
    Filter and sort a product list the way the shop page does.

    ``sort="featured"`` keeps the incoming order. Sorting is stable, so ties
    keep their relative order too.
    """
    result = list(products)

    if flag:
        attr = FLAG_FILTERS[flag]
        result = [p for p in result if getattr(p, attr)]

    if min_price is not None:
        result = [p for p in result if p.price >= min_price]
    if max_price is not None:
        result = [p for p in result if p.price <= max_price]

    if categories:
        wanted = set(categories)
        result = [p for p in result if p.category in wanted]

    if min_rating is not None:
        result = [p for p in result if p.rating >= min_rating]

    if q:
        needle = q.lower()
        result = [
            p for p in result
            if needle in p.name.lower() or needle in (p.description or "").lower()
        ]

    if sort == "price-low":
        result.sort(key=lambda p: p.price)
    elif sort == "price-high":
        result.sort(key=lambda p: p.price, reverse=True)
    elif sort == "rating":
        result.sort(key=lambda p: p.rating, reverse=True)
    elif sort == "newest":
        result.sort(key=_created_key, reverse=True)

    return result
