from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session

from fittrack.api.deps import get_current_user_id
from fittrack.crud import workout as crud
from fittrack.database import get_session
from fittrack.errors import NOT_FOUND
from fittrack.schemas.workout import (
    Pagination,
    WorkoutCreate,
    WorkoutListResponse,
    WorkoutResponse,
    WorkoutUpdate,
)

router = APIRouter(prefix="/workouts", tags=["workouts"])

SortField = Literal["exerciseDate", "caloriesBurned", "durationMinutes", "distanceKm", "createdAt"]


def _dump(workout) -> dict:
    return WorkoutResponse.model_validate(workout).model_dump(mode="json", by_alias=True)


@router.get("", response_model=WorkoutListResponse)
async def list_workouts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    exercise_type: Optional[str] = Query(None, alias="exerciseType"),
    sort_by: SortField = Query("exerciseDate", alias="sortBy"),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
    user_id: int = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    """List the caller's workouts, one page at a time"""
    workouts, total = crud.get_workouts(
        session,
        user_id,
        page=page,
        limit=limit,
        exercise_type=exercise_type,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return WorkoutListResponse(
        workouts=[WorkoutResponse.model_validate(w) for w in workouts],
        pagination=Pagination(page=page, limit=limit, total=total, total_pages=crud.total_pages(total, limit)),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_workout(
    workout: WorkoutCreate,
    user_id: int = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    db_workout = crud.create_workout(session, user_id, workout)
    return {"message": "บันทึกสำเร็จ", "workout": _dump(db_workout)}


@router.get("/{workout_id}")
async def get_workout(
    workout_id: int,
    user_id: int = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    db_workout = crud.get_workout(session, user_id, workout_id)
    if not db_workout:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return {"workout": _dump(db_workout)}


@router.put("/{workout_id}")
async def update_workout(
    workout_id: int,
    workout: WorkoutUpdate,
    user_id: int = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    db_workout = crud.get_workout(session, user_id, workout_id)
    if not db_workout:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    db_workout = crud.update_workout(session, db_workout, workout)
    return {"message": "อัปเดตสำเร็จ", "workout": _dump(db_workout)}


@router.delete("/{workout_id}")
async def delete_workout(
    workout_id: int,
    user_id: int = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    db_workout = crud.get_workout(session, user_id, workout_id)
    if not db_workout:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    crud.delete_workout(session, db_workout)
    return {"message": "ลบสำเร็จ"}
