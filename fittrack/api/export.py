from typing import Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response
from sqlmodel import Session

from fittrack.api.deps import get_current_user
from fittrack.crud.goal import get_goals
from fittrack.crud.workout import get_all_workouts
from fittrack.database import get_session
from fittrack.models.user import User
from fittrack.services.export_service import build_csv_export, build_json_export

router = APIRouter(prefix="/export", tags=["export"])


@router.get("")
async def export_data(
    format: Literal["json", "csv"] = Query("json"),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Download everything the caller owns as JSON, or their workouts as CSV"""
    workouts = get_all_workouts(session, current_user.id)

    if format == "csv":
        return Response(
            content=build_csv_export(workouts),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": 'attachment; filename="fitness-data.csv"'},
        )

    goals = sorted(get_goals(session, current_user.id), key=lambda goal: goal.created_at, reverse=True)
    return JSONResponse(
        content=build_json_export(current_user, workouts, goals),
        headers={"Content-Disposition": 'attachment; filename="fitness-data.json"'},
    )
