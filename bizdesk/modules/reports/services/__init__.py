from .sales import SalesReportService
from .inventory import InventoryReportService
from .expenses import ExpenseReportService

__all__ = ["SalesReportService", "InventoryReportService", "ExpenseReportService"]
