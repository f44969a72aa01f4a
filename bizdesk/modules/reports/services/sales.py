"""
Sales Reports Service
"""

from datetime import date
from decimal import Decimal
from typing import Dict

from .base import BaseReportService
from bizdesk.modules.sales.models import Sale


class SalesReportService(BaseReportService):
    """Service for generating sales reports"""

    def get_sales_report(self, start_date: date, end_date: date) -> Dict:
        """Sales created in the range, newest first, with revenue/paid/remaining totals."""
        query = self._apply_datetime_filter(self._owned(Sale), Sale.created_at, start_date, end_date)
        sales = query.order_by(Sale.created_at.desc()).all()

        rows = [{
            "sale_id": sale.id,
            "sale_number": sale.sale_number,
            "created_at": sale.created_at,
            "client_name": sale.client_name,
            "product_name": sale.product.name if sale.product else None,
            "boxes_quantity": sale.boxes_quantity,
            "kg_quantity": Decimal(sale.kg_quantity or 0),
            "total_amount": Decimal(sale.total_amount or 0),
            "amount_paid": Decimal(sale.amount_paid or 0),
            "remaining_amount": Decimal(sale.remaining_amount or 0),
            "payment_status": sale.payment_status,
            "payment_method": sale.payment_method,
        } for sale in sales]

        return {
            "period_start": start_date,
            "period_end": end_date,
            "sales": rows,
            "totals": {
                "total_revenue": sum((r["total_amount"] for r in rows), Decimal("0")),
                "total_paid": sum((r["amount_paid"] for r in rows), Decimal("0")),
                "total_remaining": sum((r["remaining_amount"] for r in rows), Decimal("0")),
                "sales_count": len(rows),
            }
        }
