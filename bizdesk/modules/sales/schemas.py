from pydantic import BaseModel, Field, field_validator
from decimal import Decimal
from enum import Enum
from typing import Optional, List, Literal, Union, Annotated
from uuid import UUID
from datetime import datetime

from bizdesk.modules.sales.models import PaymentStatus


# ===== SALE SCHEMAS =====

class SaleCreate(BaseModel):
    product_id: UUID
    customer_id: Optional[UUID] = None
    client_name: Optional[str] = Field(None, max_length=150, description="Por defecto, el nombre del cliente referenciado")
    phone_number: Optional[str] = Field(None, max_length=50)
    boxes_quantity: int = Field(0, ge=0)
    kg_quantity: Decimal = Field(Decimal("0"), ge=0)
    box_price: Optional[Decimal] = Field(None, ge=0, description="Por defecto, price_per_box del producto")
    kg_price: Optional[Decimal] = Field(None, ge=0, description="Por defecto, price_per_kg del producto")
    profit_per_box: Optional[Decimal] = Field(None, description="Por defecto, precio menos costo por caja")
    profit_per_kg: Optional[Decimal] = Field(None, description="Por defecto, precio menos costo por kg")
    tax: Decimal = Field(Decimal("0"), ge=0)
    amount_paid: Decimal = Field(Decimal("0"), ge=0)
    payment_method: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = None


class SalePayment(BaseModel):
    amount: Decimal = Field(..., gt=0)
    payment_method: Optional[str] = Field(None, max_length=50)


class SaleOut(BaseModel):
    id: UUID
    sale_number: str
    product_id: UUID
    customer_id: Optional[UUID] = None
    client_name: str
    phone_number: Optional[str] = None
    boxes_quantity: int
    kg_quantity: Decimal
    box_price: Decimal
    kg_price: Decimal
    profit_per_box: Decimal
    profit_per_kg: Decimal
    subtotal: Decimal
    tax: Decimal
    total_amount: Decimal
    amount_paid: Decimal
    remaining_amount: Decimal
    payment_status: PaymentStatus
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    performed_by: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SaleStats(BaseModel):
    period: str
    total_sales: int
    total_revenue: Decimal
    average_order_value: Decimal


# ===== AUDIT PROPOSALS =====

class SaleUpdateProposal(BaseModel):
    """Cambio propuesto sobre una venta; no se aplica hasta que se apruebe."""
    boxes_quantity: Optional[int] = Field(None, ge=0)
    kg_quantity: Optional[Decimal] = Field(None, ge=0)
    payment_method: Optional[str] = Field(None, max_length=50)
    reason: str = Field(..., max_length=1000)

    @field_validator("reason")
    @classmethod
    def reason_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("El motivo es obligatorio")
        return v.strip()


class SaleDeletionProposal(BaseModel):
    reason: str = Field(..., max_length=1000)

    @field_validator("reason")
    @classmethod
    def reason_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("El motivo es obligatorio")
        return v.strip()


class ProposalResult(BaseModel):
    sale_id: UUID
    audit_id: UUID
    audit_type: str


# ===== AUDIT CHANGE VARIANTS =====

class QuantityChange(BaseModel):
    kind: Literal["quantity_change"] = "quantity_change"
    boxes_before: int
    boxes_after: int
    kg_before: Decimal
    kg_after: Decimal


class PaymentMethodChange(BaseModel):
    kind: Literal["payment_method_change"] = "payment_method_change"
    before: Optional[str] = None
    after: Optional[str] = None


class Deletion(BaseModel):
    kind: Literal["deletion"] = "deletion"


class Edit(BaseModel):
    kind: Literal["edit"] = "edit"


AuditChange = Annotated[
    Union[QuantityChange, PaymentMethodChange, Deletion, Edit],
    Field(discriminator="kind")
]


# ===== AUDIT RESOLUTION =====

class AuditDecision(str, Enum):
    APPROVED = "approved"
    REJECTED = "rejected"


class AuditStatusUpdate(BaseModel):
    status: AuditDecision
    reason: Optional[str] = Field(None, max_length=1000)


class ChangeSnapshot(BaseModel):
    before: Optional[Decimal] = None
    after: Optional[Decimal] = None


class AuditOut(BaseModel):
    id: UUID
    audit_number: str
    sale_id: Optional[UUID] = None
    audit_type: str
    boxes_change: ChangeSnapshot
    kg_change: ChangeSnapshot
    payment_method_before: Optional[str] = None
    payment_method_after: Optional[str] = None
    old_values: dict
    new_values: Optional[dict] = None
    reason: str
    performed_by: UUID
    approval_status: str
    approved_by: Optional[UUID] = None
    approved_timestamp: Optional[datetime] = None
    approval_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AuditList(BaseModel):
    audits: List[AuditOut]
    total: int
