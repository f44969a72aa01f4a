"""
Inventory Reports Router
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from bizdesk.dependencies.dbDependecies import get_db
from bizdesk.modules.auth.dependencies import get_auth_context
from bizdesk.modules.auth.schemas import AuthContext

from ..services.inventory import InventoryReportService
from ..schemas import InventoryReportResponse
from ..utils import create_csv_response, CSV_HEADERS


router = APIRouter(prefix="/reports/inventory", tags=["Reports"])


@router.get("/", response_model=None)
async def get_inventory_report(
    export: Optional[str] = Query(None, pattern="^(csv)$", description="Export format: csv"),
    auth_context: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """
    Current stock valued at cost and at selling price, with potential profit.
    """
    try:
        service = InventoryReportService(db=db, user_id=auth_context.user_id)
        report_data = service.get_inventory_report()

        if export == "csv":
            return create_csv_response(
                data=report_data["products"],
                filename="inventory_report.csv",
                headers=CSV_HEADERS["inventory"]
            )

        return InventoryReportResponse(**report_data)

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error generating report: {str(e)}")
