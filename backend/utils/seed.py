# backend/utils/seed.py
from typing import List

from schemas.category import Category, InsertCategory
from schemas.product import InsertProduct
from storage.base import Storage

DEFAULT_CATEGORIES = [
    InsertCategory(name="Clothing", image_url="https://images.unsplash.com/photo-1434389677669-e08b4cac3105?auto=format&fit=crop&w=600&q=80"),
    InsertCategory(name="Accessories", image_url="https://images.unsplash.com/photo-1491637639811-60e2756cc1c7?auto=format&fit=crop&w=600&q=80"),
    InsertCategory(name="Footwear", image_url="https://images.unsplash.com/photo-1460353581641-37baddab0fa2?auto=format&fit=crop&w=600&q=80"),
    InsertCategory(name="Electronics", image_url="https://images.unsplash.com/photo-1484704849700-f032a568e944?auto=format&fit=crop&w=600&q=80"),
]

DEMO_PRODUCTS = [
    InsertProduct(name="Classic Denim Jacket", description="Mid-wash denim with a relaxed fit.", price=79.99,
                  original_price=99.99, category="Clothing", stock=25, featured=True, is_on_sale=True),
    InsertProduct(name="Leather Belt", description="Full-grain leather, brass buckle.", price=34.5,
                  category="Accessories", stock=60),
    InsertProduct(name="Trail Running Shoes", description="Grippy outsole for mixed terrain.", price=129.0,
                  category="Footwear", stock=8, is_new=True),
    InsertProduct(name="Wireless Headphones", description="Over-ear, 30h battery.", price=199.99,
                  category="Electronics", stock=15, featured=True),
]


def seed_categories(storage: Storage) -> List[Category]:
    """Create the default categories that are not present yet (matched by name)."""
    created = []
    for category in DEFAULT_CATEGORIES:
        if storage.get_category_by_name(category.name) is None:
            created.append(storage.create_category(category))
    return created


def seed_products(storage: Storage) -> int:
    existing = {p.name for p in storage.get_all_products()}
    added = 0
    for product in DEMO_PRODUCTS:
        if product.name not in existing:
            storage.create_product(product)
            added += 1
    return added
