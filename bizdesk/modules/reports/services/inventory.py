"""
Inventory Reports Service
"""

from decimal import Decimal
from typing import Dict

from .base import BaseReportService
from bizdesk.modules.products.models import Product


class InventoryReportService(BaseReportService):
    """Service for generating inventory valuation reports"""

    def get_inventory_report(self) -> Dict:
        """
        Current stock per product valued at cost (stock value) and at
        selling price (potential revenue).
        """
        products = self._owned(Product).order_by(Product.name).all()

        rows = []
        for product in products:
            boxes = Decimal(product.quantity_box or 0)
            kg = Decimal(product.quantity_kg or 0)
            rows.append({
                "product_id": product.id,
                "name": product.name,
                "sku": product.sku,
                "category_name": product.category.category_name if product.category else None,
                "quantity_box": product.quantity_box,
                "quantity_kg": kg,
                "stock_value": boxes * Decimal(product.cost_per_box or 0) + kg * Decimal(product.cost_per_kg or 0),
                "potential_revenue": boxes * Decimal(product.price_per_box or 0) + kg * Decimal(product.price_per_kg or 0),
                "is_low_stock": product.is_low_stock,
            })

        total_value = sum((r["stock_value"] for r in rows), Decimal("0"))
        potential_revenue = sum((r["potential_revenue"] for r in rows), Decimal("0"))
        return {
            "products": rows,
            "totals": {
                "total_value": total_value,
                "potential_revenue": potential_revenue,
                "potential_profit": potential_revenue - total_value,
                "product_count": len(rows),
            }
        }
