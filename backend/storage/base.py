# backend/storage/base.py
from abc import ABC, abstractmethod
from typing import List, Optional

from schemas.category import Category, InsertCategory
from schemas.order import InsertOrder, InsertOrderItem, Order, OrderItem
from schemas.product import InsertProduct, Product, ProductUpdate
from schemas.user import InsertUser, User


class Storage(ABC):
    """
    CRUD interface shared by every persistence backend.

    Lookups return None on a miss instead of raising; callers check.
    No validation happens here beyond what the schemas already enforced.
    """

    # Users
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_firebase_id(self, firebase_id: str) -> Optional[User]: ...

    @abstractmethod
    def create_user(self, user: InsertUser) -> User: ...

    @abstractmethod
    def get_all_users(self) -> List[User]: ...

    # Products
    @abstractmethod
    def get_product(self, product_id: int) -> Optional[Product]: ...

    @abstractmethod
    def get_all_products(self) -> List[Product]: ...

    @abstractmethod
    def create_product(self, product: InsertProduct) -> Product: ...

    @abstractmethod
    def update_product(self, product_id: int, changes: ProductUpdate) -> Optional[Product]: ...

    @abstractmethod
    def delete_product(self, product_id: int) -> bool: ...

    # Categories
    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]: ...

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]: ...

    @abstractmethod
    def get_all_categories(self) -> List[Category]: ...

    @abstractmethod
    def create_category(self, category: InsertCategory) -> Category: ...

    # Orders
    @abstractmethod
    def get_order(self, order_id: int) -> Optional[Order]: ...

    @abstractmethod
    def get_all_orders(self) -> List[Order]: ...

    @abstractmethod
    def get_orders_by_user(self, user_id: int) -> List[Order]: ...

    @abstractmethod
    def create_order(self, order: InsertOrder) -> Order: ...

    @abstractmethod
    def update_order_status(self, order_id: int, status: str) -> Optional[Order]: ...

    # Order items
    @abstractmethod
    def get_order_item(self, item_id: int) -> Optional[OrderItem]: ...

    @abstractmethod
    def get_order_items(self, order_id: int) -> List[OrderItem]: ...

    @abstractmethod
    def create_order_item(self, item: InsertOrderItem) -> OrderItem: ...
