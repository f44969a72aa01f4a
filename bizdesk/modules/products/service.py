from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import or_, func
from decimal import Decimal
from typing import List, Optional
from uuid import UUID
import logging

from bizdesk.common.access import get_owned_record
from bizdesk.database.database import get_owned_query
from bizdesk.modules.products.models import Product, ProductCategory
from bizdesk.modules.products.schemas import (
    ProductCreate, ProductUpdate, StockAdjustment, ProductCategoryCreate, ProductCategoryUpdate
)

logger = logging.getLogger(__name__)


class ProductCategoryService:
    """Categorías de productos por usuario"""

    def __init__(self, db: Session):
        self.db = db

    def _ensure_unique_name(self, user_id: UUID, name: str, exclude_id: Optional[UUID] = None):
        query = get_owned_query(self.db, ProductCategory, user_id).filter(
            func.lower(ProductCategory.category_name) == name.lower()
        )
        if exclude_id:
            query = query.filter(ProductCategory.id != exclude_id)
        if query.first():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Ya existe una categoría con el nombre '{name}'"
            )

    def list_categories(self, user_id: UUID) -> List[ProductCategory]:
        return get_owned_query(self.db, ProductCategory, user_id).order_by(ProductCategory.category_name).all()

    def create_category(self, data: ProductCategoryCreate, user_id: UUID) -> ProductCategory:
        try:
            self._ensure_unique_name(user_id, data.category_name)
            category = ProductCategory(user_id=user_id, **data.model_dump())
            self.db.add(category)
            self.db.commit()
            self.db.refresh(category)
            return category
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error creando categoría: {str(e)}"
            )

    def update_category(self, category_id: UUID, data: ProductCategoryUpdate, user_id: UUID) -> ProductCategory:
        try:
            category = get_owned_record(self.db, ProductCategory, category_id, user_id, "Categoría")
            if data.category_name:
                self._ensure_unique_name(user_id, data.category_name, exclude_id=category.id)
            for field, value in data.model_dump(exclude_unset=True).items():
                setattr(category, field, value)
            self.db.commit()
            self.db.refresh(category)
            return category
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error actualizando categoría: {str(e)}"
            )

    def delete_category(self, category_id: UUID, user_id: UUID) -> dict:
        try:
            category = get_owned_record(self.db, ProductCategory, category_id, user_id, "Categoría")
            in_use = self.db.query(Product).filter(Product.category_id == category.id).count()
            if in_use:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"No se puede eliminar la categoría: {in_use} producto(s) la usan"
                )
            self.db.delete(category)
            self.db.commit()
            return {"message": "Categoría eliminada exitosamente"}
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error eliminando categoría: {str(e)}"
            )


class ProductService:
    """Servicio de productos e inventario"""

    def __init__(self, db: Session):
        self.db = db

    def _ensure_unique_sku(self, user_id: UUID, sku: str, exclude_id: Optional[UUID] = None):
        query = get_owned_query(self.db, Product, user_id).filter(Product.sku == sku)
        if exclude_id:
            query = query.filter(Product.id != exclude_id)
        if query.first():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Ya existe un producto con el SKU {sku}"
            )

    def list_products(self, user_id: UUID, category_id: Optional[UUID] = None, search: Optional[str] = None) -> List[Product]:
        query = get_owned_query(self.db, Product, user_id)
        if category_id:
            query = query.filter(Product.category_id == category_id)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(or_(
                func.lower(Product.name).like(pattern),
                func.lower(Product.sku).like(pattern)
            ))
        return query.order_by(Product.name).all()

    def get_product(self, product_id: UUID, user_id: UUID) -> Product:
        return get_owned_record(self.db, Product, product_id, user_id, "Producto")

    def create_product(self, data: ProductCreate, user_id: UUID) -> Product:
        try:
            self._ensure_unique_sku(user_id, data.sku)
            if data.category_id:
                get_owned_record(self.db, ProductCategory, data.category_id, user_id, "Categoría")

            product = Product(user_id=user_id, is_active=True, **data.model_dump())
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
            logger.info(f"Product {product.id} created with {product.quantity_box} boxes")
            return product
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error creando producto: {str(e)}"
            )

    def update_product(self, product_id: UUID, data: ProductUpdate, user_id: UUID) -> Product:
        try:
            product = self.get_product(product_id, user_id)
            if data.sku and data.sku != product.sku:
                self._ensure_unique_sku(user_id, data.sku, exclude_id=product.id)
            if data.category_id:
                get_owned_record(self.db, ProductCategory, data.category_id, user_id, "Categoría")

            for field, value in data.model_dump(exclude_unset=True).items():
                setattr(product, field, value)

            self.db.commit()
            self.db.refresh(product)
            return product
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error actualizando producto: {str(e)}"
            )

    def adjust_stock(self, product_id: UUID, adjustment: StockAdjustment, user_id: UUID) -> Product:
        """Corrección manual de stock; el resultado nunca baja de cero."""
        try:
            product = get_owned_record(self.db, Product, product_id, user_id, "Producto", for_update=True)
            product.quantity_box = max(0, (product.quantity_box or 0) + adjustment.box_adjustment)
            product.quantity_kg = max(Decimal("0"), Decimal(product.quantity_kg or 0) + adjustment.kg_adjustment)
            self.db.commit()
            self.db.refresh(product)
            logger.info(
                f"Stock adjusted for product {product.id}: "
                f"{adjustment.box_adjustment:+d} boxes, {adjustment.kg_adjustment:+} kg ({adjustment.reason})"
            )
            return product
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error ajustando stock: {str(e)}"
            )

    def get_low_stock(self, user_id: UUID) -> List[Product]:
        return get_owned_query(self.db, Product, user_id).filter(
            Product.is_active.is_(True),
            Product.quantity_box <= Product.min_stock
        ).order_by(Product.quantity_box).all()


def apply_sale_to_stock(product: Product, boxes: int, kg: Decimal) -> None:
    """Descuenta (o repone, con cantidades negativas) el stock de un producto, con piso en cero."""
    product.quantity_box = max(0, (product.quantity_box or 0) - int(boxes or 0))
    product.quantity_kg = max(Decimal("0"), Decimal(product.quantity_kg or 0) - Decimal(kg or 0))
