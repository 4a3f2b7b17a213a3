# backend/models/product.py
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, JSON, CheckConstraint, func
from database import Base

# Model Product
# A single catalog entry. Prices are stored as floats, image URLs as a JSON list
# pointing at the external media host.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(String)

    price = Column(Float, CheckConstraint("price >= 0"), nullable=False)
    original_price = Column(Float, nullable=True)

    image_urls = Column(JSON, nullable=False, default=list)
    category = Column(String, nullable=False, index=True)
    stock = Column(Integer, CheckConstraint("stock >= 0"), nullable=False, default=0)

    rating = Column(Float, nullable=False, default=0)
    review_count = Column(Integer, nullable=False, default=0)

    # Merchandising flags used by the shop filters
    featured = Column(Boolean, nullable=False, default=False)
    is_on_sale = Column(Boolean, nullable=False, default=False)
    is_new = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
