from pydantic import BaseModel
from decimal import Decimal
from typing import List

from bizdesk.modules.products.schemas import ProductOut
from bizdesk.modules.sales.schemas import SaleOut


class DashboardStats(BaseModel):
    period: str
    total_sales: int
    total_revenue: Decimal
    total_expenses: Decimal
    total_profit: Decimal
    low_stock_count: int
    low_stock_products: List[ProductOut]
    recent_sales: List[SaleOut]
