"""
Expense Reports Router
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from bizdesk.dependencies.dbDependecies import get_db
from bizdesk.modules.auth.dependencies import get_auth_context
from bizdesk.modules.auth.schemas import AuthContext

from ..services.expenses import ExpenseReportService
from ..schemas import ExpenseReportResponse
from ..utils import create_csv_response, CSV_HEADERS


router = APIRouter(prefix="/reports/expenses", tags=["Reports"])


@router.get("/", response_model=None)
async def get_expense_report(
    start_date: date = Query(..., description="Start date for the report period"),
    end_date: date = Query(..., description="End date for the report period"),
    export: Optional[str] = Query(None, pattern="^(csv)$", description="Export format: csv"),
    auth_context: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """
    Expenses dated within the range, with their category and the total amount.
    """
    try:
        if end_date < start_date:
            raise HTTPException(
                status_code=422,
                detail="end_date must be greater than or equal to start_date"
            )

        service = ExpenseReportService(db=db, user_id=auth_context.user_id)
        report_data = service.get_expense_report(start_date=start_date, end_date=end_date)

        if export == "csv":
            return create_csv_response(
                data=report_data["expenses"],
                filename=f"expense_report_{start_date}_{end_date}.csv",
                headers=CSV_HEADERS["expenses"]
            )

        return ExpenseReportResponse(**report_data)

    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error generating report: {str(e)}")
