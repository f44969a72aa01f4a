"""
Dashboard: resumen del negocio para el periodo seleccionado
"""
from sqlalchemy.orm import Session
from sqlalchemy import func
from decimal import Decimal
from uuid import UUID

from bizdesk.common.periods import StatsPeriod, period_start
from bizdesk.database.database import get_owned_query
from bizdesk.modules.dashboard.schemas import DashboardStats
from bizdesk.modules.expenses.models import Expense
from bizdesk.modules.products.schemas import ProductOut
from bizdesk.modules.products.service import ProductService
from bizdesk.modules.sales.models import Sale
from bizdesk.modules.sales.schemas import SaleOut


class DashboardService:

    def __init__(self, db: Session):
        self.db = db

    def get_stats(self, user_id: UUID, period: StatsPeriod) -> DashboardStats:
        """
        Ingresos = suma de lo cobrado; utilidad = utilidad por caja/kg de las
        ventas del periodo menos los gastos del periodo.
        """
        start = period_start(period)

        sales = get_owned_query(self.db, Sale, user_id).filter(
            Sale.created_at >= start
        ).order_by(Sale.created_at.desc()).all()

        total_expenses = self.db.query(func.coalesce(func.sum(Expense.amount), 0)).filter(
            Expense.user_id == user_id,
            Expense.expense_date >= start.date()
        ).scalar()
        total_expenses = Decimal(total_expenses or 0)

        total_revenue = sum((Decimal(s.amount_paid or 0) for s in sales), Decimal("0"))
        gross_profit = sum(
            (Decimal(s.boxes_quantity or 0) * Decimal(s.profit_per_box or 0)
             + Decimal(s.kg_quantity or 0) * Decimal(s.profit_per_kg or 0) for s in sales),
            Decimal("0")
        )

        low_stock = ProductService(self.db).get_low_stock(user_id)

        return DashboardStats(
            period=period.value,
            total_sales=len(sales),
            total_revenue=total_revenue,
            total_expenses=total_expenses,
            total_profit=gross_profit - total_expenses,
            low_stock_count=len(low_stock),
            low_stock_products=[ProductOut.model_validate(p) for p in low_stock[:5]],
            recent_sales=[SaleOut.model_validate(s) for s in sales[:5]]
        )
