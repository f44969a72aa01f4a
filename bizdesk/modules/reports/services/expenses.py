"""
Expense Reports Service
"""

from datetime import date
from decimal import Decimal
from typing import Dict

from .base import BaseReportService
from bizdesk.modules.expenses.models import Expense


class ExpenseReportService(BaseReportService):
    """Service for generating expense reports"""

    def get_expense_report(self, start_date: date, end_date: date) -> Dict:
        query = self._apply_date_filter(self._owned(Expense), Expense.expense_date, start_date, end_date)
        expenses = query.order_by(Expense.expense_date.desc()).all()

        rows = [{
            "expense_id": expense.id,
            "title": expense.title,
            "category_name": expense.category_name,
            "amount": Decimal(expense.amount or 0),
            "expense_date": expense.expense_date,
            "status": expense.status,
            "payment_method": expense.payment_method,
        } for expense in expenses]

        return {
            "period_start": start_date,
            "period_end": end_date,
            "expenses": rows,
            "totals": {
                "total_amount": sum((r["amount"] for r in rows), Decimal("0")),
                "expense_count": len(rows),
            }
        }
