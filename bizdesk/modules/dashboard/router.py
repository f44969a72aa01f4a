from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bizdesk.common.periods import StatsPeriod
from bizdesk.dependencies.dbDependecies import get_db
from bizdesk.modules.auth.dependencies import get_auth_context
from bizdesk.modules.auth.schemas import AuthContext
from bizdesk.modules.dashboard.schemas import DashboardStats
from bizdesk.modules.dashboard.service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    period: StatsPeriod = Query(StatsPeriod.DAILY, description="daily, weekly o monthly"),
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(get_auth_context)
):
    return DashboardService(db).get_stats(auth_context.user_id, period)
