"""
Routers package for Reports module
"""

from .sales import router as sales_router
from .inventory import router as inventory_router
from .expenses import router as expenses_router

__all__ = [
    "sales_router",
    "inventory_router",
    "expenses_router"
]
