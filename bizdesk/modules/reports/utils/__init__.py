"""
Utilities for Reports module

Provides CSV export functionality and the column headers of each report.
"""

import csv
import io
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List

from fastapi import Response


def create_csv_response(
    data: List[Dict[str, Any]],
    filename: str,
    headers: Dict[str, str] = None
) -> Response:
    """
    Create a CSV response from a list of dictionaries.

    Args:
        data: List of dictionaries with report data
        filename: Name for the CSV file
        headers: Optional mapping of field names to CSV headers

    Returns:
        FastAPI Response with CSV content
    """
    output = io.StringIO()

    fieldnames = list(headers.keys()) if headers else (list(data[0].keys()) if data else [])
    csv_headers = list(headers.values()) if headers else fieldnames

    writer = csv.DictWriter(output, fieldnames=fieldnames, extrasaction="ignore")
    writer.writerow(dict(zip(fieldnames, csv_headers)))
    for row in data:
        writer.writerow({key: format_csv_value(row.get(key)) for key in fieldnames})

    csv_content = output.getvalue()
    output.close()

    return Response(
        content=csv_content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={filename}",
            "Content-Type": "text/csv; charset=utf-8"
        }
    )


def format_csv_value(value: Any) -> str:
    """Format a value for CSV export."""
    if value is None:
        return ""
    elif isinstance(value, bool):
        return "Yes" if value else "No"
    elif isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, (date, datetime)):
        return value.isoformat()
    else:
        return str(value)


CSV_HEADERS = {
    "sales": {
        "sale_number": "Venta",
        "created_at": "Fecha",
        "client_name": "Cliente",
        "product_name": "Producto",
        "boxes_quantity": "Cajas",
        "kg_quantity": "Kg",
        "total_amount": "Total",
        "amount_paid": "Pagado",
        "remaining_amount": "Pendiente",
        "payment_status": "Estado",
        "payment_method": "Método de Pago"
    },
    "inventory": {
        "name": "Producto",
        "sku": "SKU",
        "category_name": "Categoría",
        "quantity_box": "Cajas",
        "quantity_kg": "Kg",
        "stock_value": "Valor en Stock",
        "potential_revenue": "Ingreso Potencial",
        "is_low_stock": "Stock Bajo"
    },
    "expenses": {
        "expense_date": "Fecha",
        "title": "Concepto",
        "category_name": "Categoría",
        "amount": "Monto",
        "status": "Estado",
        "payment_method": "Método de Pago"
    }
}
