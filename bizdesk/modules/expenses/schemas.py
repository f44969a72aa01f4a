from pydantic import BaseModel, Field
from decimal import Decimal
from typing import Optional, List
from uuid import UUID
from datetime import date, datetime

from bizdesk.modules.expenses.models import ExpenseStatus


class ExpenseCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    budget: Optional[Decimal] = Field(None, ge=0)


class ExpenseCategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    budget: Optional[Decimal] = Field(None, ge=0)


class ExpenseCategoryOut(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    budget: Optional[Decimal] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ExpenseCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=150)
    category_id: UUID
    amount: Decimal = Field(..., gt=0)
    expense_date: date
    status: ExpenseStatus = ExpenseStatus.PAID
    payment_method: Optional[str] = Field(None, max_length=50)
    receipt_url: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class ExpenseOut(BaseModel):
    id: UUID
    title: str
    category_id: UUID
    category_name: Optional[str] = None
    amount: Decimal
    expense_date: date
    status: ExpenseStatus
    payment_method: Optional[str] = None
    receipt_url: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class CategoryTotal(BaseModel):
    category_id: UUID
    category_name: str
    total: Decimal
    count: int


class ExpenseStats(BaseModel):
    period: str
    total_amount: Decimal
    total_count: int
    by_category: List[CategoryTotal]
