# backend/storage/sql.py
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session, sessionmaker

from models.category import Category as CategoryRow
from models.order import Order as OrderRow, OrderItem as OrderItemRow
from models.product import Product as ProductRow
from models.users import User as UserRow
from schemas.category import Category, InsertCategory
from schemas.order import InsertOrder, InsertOrderItem, Order, OrderItem
from schemas.product import InsertProduct, Product, ProductUpdate
from schemas.user import InsertUser, User
from storage.base import Storage


class SqlStorage(Storage):
    """Storage backed by SQLAlchemy tables; one short-lived session per call."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _session(self) -> Session:
        return self.session_factory()

    def _add(self, db: Session, row):
        db.add(row)
        db.commit()
        db.refresh(row)
        return row

    # Users
    def get_user(self, user_id: int) -> Optional[User]:
        with self._session() as db:
            row = db.get(UserRow, user_id)
            return User.model_validate(row) if row else None

    def _find_user(self, column, value) -> Optional[User]:
        with self._session() as db:
            row = db.query(UserRow).filter(column == value).order_by(UserRow.id).first()
            return User.model_validate(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self._find_user(UserRow.display_name, username)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self._find_user(UserRow.email, email)

    def get_user_by_firebase_id(self, firebase_id: str) -> Optional[User]:
        return self._find_user(UserRow.firebase_id, firebase_id)

    def create_user(self, user: InsertUser) -> User:
        with self._session() as db:
            row = UserRow(created_at=datetime.now(timezone.utc), **user.model_dump())
            return User.model_validate(self._add(db, row))

    def get_all_users(self) -> List[User]:
        with self._session() as db:
            return [User.model_validate(r) for r in db.query(UserRow).order_by(UserRow.id).all()]

    # Products
    def get_product(self, product_id: int) -> Optional[Product]:
        with self._session() as db:
            row = db.get(ProductRow, product_id)
            return Product.model_validate(row) if row else None

    def get_all_products(self) -> List[Product]:
        with self._session() as db:
            return [Product.model_validate(r) for r in db.query(ProductRow).order_by(ProductRow.id).all()]

    def create_product(self, product: InsertProduct) -> Product:
        with self._session() as db:
            row = ProductRow(
                rating=0,
                review_count=0,
                created_at=datetime.now(timezone.utc),
                **product.model_dump(),
            )
            return Product.model_validate(self._add(db, row))

    def update_product(self, product_id: int, changes: ProductUpdate) -> Optional[Product]:
        with self._session() as db:
            row = db.get(ProductRow, product_id)
            if row is None:
                return None

            for field, value in changes.model_dump(exclude_unset=True).items():
                setattr(row, field, value)
            db.commit()
            db.refresh(row)
            return Product.model_validate(row)

    def delete_product(self, product_id: int) -> bool:
        with self._session() as db:
            row = db.get(ProductRow, product_id)
            if row is None:
                return False
            db.delete(row)
            db.commit()
            return True

    # Categories
    def get_category(self, category_id: int) -> Optional[Category]:
        with self._session() as db:
            row = db.get(CategoryRow, category_id)
            return Category.model_validate(row) if row else None

    def get_category_by_name(self, name: str) -> Optional[Category]:
        with self._session() as db:
            row = db.query(CategoryRow).filter(CategoryRow.name == name).first()
            return Category.model_validate(row) if row else None

    def get_all_categories(self) -> List[Category]:
        with self._session() as db:
            return [Category.model_validate(r) for r in db.query(CategoryRow).order_by(CategoryRow.id).all()]

    def create_category(self, category: InsertCategory) -> Category:
        with self._session() as db:
            return Category.model_validate(self._add(db, CategoryRow(**category.model_dump())))

    # Orders
    def get_order(self, order_id: int) -> Optional[Order]:
        with self._session() as db:
            row = db.get(OrderRow, order_id)
            return Order.model_validate(row) if row else None

    def get_all_orders(self) -> List[Order]:
        with self._session() as db:
            return [Order.model_validate(r) for r in db.query(OrderRow).order_by(OrderRow.id).all()]

    def get_orders_by_user(self, user_id: int) -> List[Order]:
        with self._session() as db:
            rows = db.query(OrderRow).filter(OrderRow.user_id == user_id).order_by(OrderRow.id).all()
            return [Order.model_validate(r) for r in rows]

    def create_order(self, order: InsertOrder) -> Order:
        with self._session() as db:
            row = OrderRow(
                user_id=order.user_id,
                status=order.status or "pending",
                total=order.total,
                shipping_address=order.shipping_address.model_dump(),
                created_at=datetime.now(timezone.utc),
            )
            return Order.model_validate(self._add(db, row))

    def update_order_status(self, order_id: int, status: str) -> Optional[Order]:
        with self._session() as db:
            row = db.get(OrderRow, order_id)
            if row is None:
                return None
            row.status = status
            db.commit()
            db.refresh(row)
            return Order.model_validate(row)

    # Order items
    def get_order_item(self, item_id: int) -> Optional[OrderItem]:
        with self._session() as db:
            row = db.get(OrderItemRow, item_id)
            return OrderItem.model_validate(row) if row else None

    def get_order_items(self, order_id: int) -> List[OrderItem]:
        with self._session() as db:
            rows = db.query(OrderItemRow).filter(OrderItemRow.order_id == order_id).order_by(OrderItemRow.id).all()
            return [OrderItem.model_validate(r) for r in rows]

    def create_order_item(self, item: InsertOrderItem) -> OrderItem:
        with self._session() as db:
            return OrderItem.model_validate(self._add(db, OrderItemRow(**item.model_dump())))
