from fastapi import APIRouter, Depends
from sqlmodel import Session

from fittrack.api.deps import get_current_user_id
from fittrack.database import get_session
from fittrack.schemas.workout import WorkoutResponse
from fittrack.services.stats_service import StatsService

router = APIRouter(prefix="/analytics", tags=["analytics"])
stats_service = StatsService()


@router.get("/monthly")
async def get_monthly(
    user_id: int = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    """Totals for each of the last six calendar months"""
    return {"data": stats_service.monthly(session, user_id)}


@router.get("/breakdown")
async def get_breakdown(
    user_id: int = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    return {"data": stats_service.breakdown(session, user_id)}


@router.get("/intensity")
async def get_intensity(
    user_id: int = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    return {"data": stats_service.intensity(session, user_id)}


@router.get("/recent")
async def get_recent(
    user_id: int = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    workouts = stats_service.recent(session, user_id)
    return {"workouts": [WorkoutResponse.model_validate(w).model_dump(mode="json", by_alias=True) for w in workouts]}
