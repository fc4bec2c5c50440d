"""
Dashboard API Routes
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import sessionmaker

from framebox.core.database import get_session_factory
from framebox.core.security import get_current_session
from framebox.schemas import DashboardStats
from framebox.services.dashboard_service import DashboardService

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(get_current_session)]
)


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    now: Optional[datetime] = None,
    session_factory: sessionmaker = Depends(get_session_factory)
):
    """Get main dashboard statistics for the month and year containing ``now``"""
    dashboard_service = DashboardService(session_factory)
    try:
        return await dashboard_service.get_stats(now)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Dashboard statistics are unavailable right now"
        )
