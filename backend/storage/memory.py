# backend/storage/memory.py
from datetime import datetime, timezone
from itertools import count
from typing import Dict, List, Optional

from schemas.category import Category, InsertCategory
from schemas.order import InsertOrder, InsertOrderItem, Order, OrderItem
from schemas.product import InsertProduct, Product, ProductUpdate
from schemas.user import InsertUser, User
from storage.base import Storage


class MemStorage(Storage):
    """Dict-backed storage for development and tests. State dies with the process."""

    def __init__(self):
        self.users: Dict[int, User] = {}
        self.products: Dict[int, Product] = {}
        self.categories: Dict[int, Category] = {}
        self.orders: Dict[int, Order] = {}
        self.order_items: Dict[int, OrderItem] = {}

        # Ids start at 1 and are never reused
        self._user_ids = count(1)
        self._product_ids = count(1)
        self._category_ids = count(1)
        self._order_ids = count(1)
        self._order_item_ids = count(1)

    # Users
    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.display_name == username), None)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def get_user_by_firebase_id(self, firebase_id: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.firebase_id == firebase_id), None)

    def create_user(self, user: InsertUser) -> User:
        new_user = User(id=next(self._user_ids), created_at=datetime.now(timezone.utc), **user.model_dump())
        self.users[new_user.id] = new_user
        return new_user

    def get_all_users(self) -> List[User]:
        return list(self.users.values())

    # Products
    def get_product(self, product_id: int) -> Optional[Product]:
        return self.products.get(product_id)

    def get_all_products(self) -> List[Product]:
        return list(self.products.values())

    def create_product(self, product: InsertProduct) -> Product:
        new_product = Product(
            id=next(self._product_ids),
            rating=0,
            review_count=0,
            created_at=datetime.now(timezone.utc),
            **product.model_dump(),
        )
        self.products[new_product.id] = new_product
        return new_product

    def update_product(self, product_id: int, changes: ProductUpdate) -> Optional[Product]:
        product = self.products.get(product_id)
        if product is None:
            return None

        updated = product.model_copy(update=changes.model_dump(exclude_unset=True))
        self.products[product_id] = updated
        return updated

    def delete_product(self, product_id: int) -> bool:
        return self.products.pop(product_id, None) is not None

    # Categories
    def get_category(self, category_id: int) -> Optional[Category]:
        return self.categories.get(category_id)

    def get_category_by_name(self, name: str) -> Optional[Category]:
        return next((c for c in self.categories.values() if c.name == name), None)

    def get_all_categories(self) -> List[Category]:
        return list(self.categories.values())

    def create_category(self, category: InsertCategory) -> Category:
        new_category = Category(id=next(self._category_ids), **category.model_dump())
        self.categories[new_category.id] = new_category
        return new_category

    # Orders
    def get_order(self, order_id: int) -> Optional[Order]:
        return self.orders.get(order_id)

    def get_all_orders(self) -> List[Order]:
        return list(self.orders.values())

    def get_orders_by_user(self, user_id: int) -> List[Order]:
        return [o for o in self.orders.values() if o.user_id == user_id]

    def create_order(self, order: InsertOrder) -> Order:
        new_order = Order(
            id=next(self._order_ids),
            user_id=order.user_id,
            status=order.status or "pending",
            total=order.total,
            shipping_address=order.shipping_address,
            created_at=datetime.now(timezone.utc),
        )
        self.orders[new_order.id] = new_order
        return new_order

    def update_order_status(self, order_id: int, status: str) -> Optional[Order]:
        order = self.orders.get(order_id)
        if order is None:
            return None

        updated = order.model_copy(update={"status": status})
        self.orders[order_id] = updated
        return updated

    # Order items
    def get_order_item(self, item_id: int) -> Optional[OrderItem]:
        return self.order_items.get(item_id)

    def get_order_items(self, order_id: int) -> List[OrderItem]:
        return [it for it in self.order_items.values() if it.order_id == order_id]

    def create_order_item(self, item: InsertOrderItem) -> OrderItem:
        new_item = OrderItem(id=next(self._order_item_ids), **item.model_dump())
        self.order_items[new_item.id] = new_item
        return new_item
