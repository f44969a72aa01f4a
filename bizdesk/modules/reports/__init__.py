"""
Módulo de Reportes

Genera reportes de ventas, inventario y gastos sobre las tablas de los demás
módulos (no crea tablas propias). Todos los reportes se pueden exportar a CSV.

- routers/ -> Endpoints FastAPI con validación de rango de fechas
- services/ -> Consultas y totales
- schemas/ -> Modelos Pydantic de respuesta
- utils/ -> Exportación CSV
"""

from .routers import sales_router, inventory_router, expenses_router

__all__ = [
    "sales_router",
    "inventory_router",
    "expenses_router",
]
