from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, UniqueConstraint, Numeric, Text
from sqlalchemy.orm import relationship
from sqlalchemy.dialects.postgresql import UUID
from uuid import uuid4
from bizdesk.database.database import Base
from bizdesk.common.mixins import BaseMixin


class ProductCategory(Base, BaseMixin):
    __tablename__ = "product_categories"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    category_name = Column(String(100), nullable=False)
    description = Column(String(255), nullable=True)

    products = relationship("Product", back_populates="category")

    __table_args__ = (
        UniqueConstraint("user_id", "category_name", name="uq_product_category_user_name"),
    )


class Product(Base, BaseMixin):
    __tablename__ = "products"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    name = Column(String(150), nullable=False)
    sku = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    category_id = Column(UUID(as_uuid=True), ForeignKey("product_categories.id"), nullable=True)

    # Stock is tracked in whole boxes and loose kilograms
    quantity_box = Column(Integer, nullable=False, default=0)
    quantity_kg = Column(Numeric(12, 2), nullable=False, default=0)

    cost_per_box = Column(Numeric(15, 2), nullable=False, default=0)
    cost_per_kg = Column(Numeric(15, 2), nullable=False, default=0)
    price_per_box = Column(Numeric(15, 2), nullable=False, default=0)
    price_per_kg = Column(Numeric(15, 2), nullable=False, default=0)

    min_stock = Column(Integer, nullable=False, default=0)
    image_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    category = relationship("ProductCategory", back_populates="products", lazy="joined")

    __table_args__ = (
        UniqueConstraint("user_id", "sku", name="uq_product_user_sku"),
    )

    @property
    def is_low_stock(self) -> bool:
        return bool(self.is_active) and (self.quantity_box or 0) <= (self.min_stock or 0)
