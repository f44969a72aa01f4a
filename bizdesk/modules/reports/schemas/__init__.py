"""
Pydantic schemas for report responses
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel


class SalesReportRow(BaseModel):
    sale_id: UUID
    sale_number: str
    created_at: datetime
    client_name: str
    product_name: Optional[str] = None
    boxes_quantity: int
    kg_quantity: Decimal
    total_amount: Decimal
    amount_paid: Decimal
    remaining_amount: Decimal
    payment_status: str
    payment_method: Optional[str] = None


class SalesReportTotals(BaseModel):
    total_revenue: Decimal
    total_paid: Decimal
    total_remaining: Decimal
    sales_count: int


class SalesReportResponse(BaseModel):
    period_start: date
    period_end: date
    sales: List[SalesReportRow]
    totals: SalesReportTotals


class InventoryReportRow(BaseModel):
    product_id: UUID
    name: str
    sku: str
    category_name: Optional[str] = None
    quantity_box: int
    quantity_kg: Decimal
    stock_value: Decimal
    potential_revenue: Decimal
    is_low_stock: bool


class InventoryReportTotals(BaseModel):
    total_value: Decimal
    potential_revenue: Decimal
    potential_profit: Decimal
    product_count: int


class InventoryReportResponse(BaseModel):
    products: List[InventoryReportRow]
    totals: InventoryReportTotals


class ExpenseReportRow(BaseModel):
    expense_id: UUID
    title: str
    category_name: Optional[str] = None
    amount: Decimal
    expense_date: date
    status: str
    payment_method: Optional[str] = None


class ExpenseReportTotals(BaseModel):
    total_amount: Decimal
    expense_count: int


class ExpenseReportResponse(BaseModel):
    period_start: date
    period_end: date
    expenses: List[ExpenseReportRow]
    totals: ExpenseReportTotals
