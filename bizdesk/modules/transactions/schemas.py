from pydantic import BaseModel, Field
from decimal import Decimal
from typing import Optional
from uuid import UUID
from datetime import datetime

from bizdesk.modules.sales.models import PaymentStatus


class TransactionBase(BaseModel):
    sale_id: Optional[UUID] = None
    product_name: str = Field(..., min_length=1, max_length=150)
    client_name: str = Field(..., min_length=1, max_length=150)
    boxes_quantity: int = Field(0, ge=0)
    kg_quantity: Decimal = Field(Decimal("0"), ge=0)
    total_amount: Decimal = Field(..., ge=0)
    payment_status: PaymentStatus
    payment_method: Optional[str] = Field(None, max_length=50)


class TransactionCreate(TransactionBase):
    transaction_number: Optional[str] = Field(None, max_length=50, description="Se genera si no se envía")


class TransactionReplace(TransactionBase):
    """Reemplazo completo de una transacción existente."""


class TransactionOut(TransactionBase):
    id: UUID
    transaction_number: str
    updated_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
