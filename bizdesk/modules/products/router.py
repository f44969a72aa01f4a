from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from bizdesk.dependencies.dbDependecies import get_db
from bizdesk.modules.auth.dependencies import get_auth_context
from bizdesk.modules.auth.schemas import AuthContext
from bizdesk.modules.products.service import ProductService, ProductCategoryService
from bizdesk.modules.products.schemas import (
    ProductCreate, ProductUpdate, ProductOut, StockAdjustment, LowStockResponse,
    ProductCategoryCreate, ProductCategoryUpdate, ProductCategoryOut
)

product_router = APIRouter(prefix="/products", tags=["Products"])
product_category_router = APIRouter(prefix="/product-categories", tags=["Product Categories"])


@product_router.get("/", response_model=List[ProductOut])
async def list_products(
    category_id: Optional[UUID] = Query(None, description="Filtrar por categoría"),
    search: Optional[str] = Query(None, description="Buscar por nombre o SKU"),
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    """Lista productos del usuario."""
    return ProductService(db).list_products(auth_context.user_id, category_id, search)


@product_router.get("/low-stock", response_model=LowStockResponse)
async def low_stock(db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    """Productos activos con stock en cajas igual o menor al mínimo."""
    products = ProductService(db).get_low_stock(auth_context.user_id)
    return LowStockResponse(products=[ProductOut.model_validate(p) for p in products], total_count=len(products))


@product_router.post("/", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
async def create_product(
    data: ProductCreate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return ProductService(db).create_product(data, auth_context.user_id)


@product_router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: UUID, db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    return ProductService(db).get_product(product_id, auth_context.user_id)


@product_router.patch("/{product_id}", response_model=ProductOut)
async def update_product(
    product_id: UUID,
    data: ProductUpdate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return ProductService(db).update_product(product_id, data, auth_context.user_id)


@product_router.post("/{product_id}/adjust-stock", response_model=ProductOut)
async def adjust_stock(
    product_id: UUID,
    adjustment: StockAdjustment,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    """Ajuste manual de stock (reabastecimiento o corrección)."""
    return ProductService(db).adjust_stock(product_id, adjustment, auth_context.user_id)


@product_category_router.get("/", response_model=List[ProductCategoryOut])
async def list_categories(db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    return ProductCategoryService(db).list_categories(auth_context.user_id)


@product_category_router.post("/", response_model=ProductCategoryOut, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: ProductCategoryCreate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return ProductCategoryService(db).create_category(data, auth_context.user_id)


@product_category_router.patch("/{category_id}", response_model=ProductCategoryOut)
async def update_category(
    category_id: UUID,
    data: ProductCategoryUpdate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return ProductCategoryService(db).update_category(category_id, data, auth_context.user_id)


@product_category_router.delete("/{category_id}")
async def delete_category(category_id: UUID, db: Session = Depends(get_db), auth_context: AuthContext = Depends(get_auth_context)):
    """Elimina una categoría que no esté en uso."""
    return ProductCategoryService(db).delete_category(category_id, auth_context.user_id)
