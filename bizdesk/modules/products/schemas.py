from pydantic import BaseModel, Field
from decimal import Decimal
from typing import Optional, List
from uuid import UUID
from datetime import datetime


# ===== CATEGORY SCHEMAS =====

class ProductCategoryCreate(BaseModel):
    category_name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)


class ProductCategoryUpdate(BaseModel):
    category_name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)


class ProductCategoryOut(BaseModel):
    id: UUID
    category_name: str
    description: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


# ===== PRODUCT SCHEMAS =====

class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=150, description="Nombre del producto")
    sku: str = Field(..., min_length=1, max_length=50, description="Código único por usuario")
    description: Optional[str] = None
    category_id: Optional[UUID] = None
    quantity_box: int = Field(0, ge=0, description="Stock en cajas")
    quantity_kg: Decimal = Field(Decimal("0"), ge=0, description="Stock en kilogramos")
    cost_per_box: Decimal = Field(Decimal("0"), ge=0)
    cost_per_kg: Decimal = Field(Decimal("0"), ge=0)
    price_per_box: Decimal = Field(Decimal("0"), ge=0)
    price_per_kg: Decimal = Field(Decimal("0"), ge=0)
    min_stock: int = Field(0, ge=0, description="Umbral de stock bajo (cajas)")
    image_url: Optional[str] = Field(None, max_length=500)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    sku: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = None
    category_id: Optional[UUID] = None
    cost_per_box: Optional[Decimal] = Field(None, ge=0)
    cost_per_kg: Optional[Decimal] = Field(None, ge=0)
    price_per_box: Optional[Decimal] = Field(None, ge=0)
    price_per_kg: Optional[Decimal] = Field(None, ge=0)
    min_stock: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = None


class StockAdjustment(BaseModel):
    box_adjustment: int = Field(0, description="Cajas a sumar (positivo) o restar (negativo)")
    kg_adjustment: Decimal = Field(Decimal("0"), description="Kilogramos a sumar o restar")
    reason: str = Field(..., min_length=1, max_length=255)


class ProductOut(ProductBase):
    id: UUID
    is_active: bool
    is_low_stock: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LowStockResponse(BaseModel):
    products: List[ProductOut]
    total_count: int
