from fastapi import APIRouter, Depends
from sqlmodel import Session

from fittrack.api.deps import get_current_user_id
from fittrack.database import get_session
from fittrack.services.stats_service import StatsService

router = APIRouter(prefix="/stats", tags=["stats"])
stats_service = StatsService()


@router.get("/summary")
async def get_summary(
    user_id: int = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    """Lifetime totals, the trailing 7 days, and the change against the 7 days before"""
    return stats_service.summary(session, user_id)


@router.get("/chart")
async def get_chart(
    user_id: int = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    return {"data": stats_service.daily_chart(session, user_id)}
