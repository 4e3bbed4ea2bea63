from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session

from fittrack.api.deps import get_current_user_id
from fittrack.crud import goal as crud
from fittrack.database import get_session
from fittrack.errors import NOT_FOUND
from fittrack.models.goal import Goal, GoalStatus
from fittrack.schemas.goal import GoalCreate, GoalResponse
from fittrack.services.stats_service import StatsService

router = APIRouter(prefix="/goals", tags=["goals"])
stats_service = StatsService()

STATUS_ORDER = {GoalStatus.ACTIVE: 0, GoalStatus.COMPLETED: 1, GoalStatus.FAILED: 2}


def goal_with_progress(session: Session, goal: Goal) -> dict:
    """Serialize a goal with its progress and status computed from current workouts."""
    progress = stats_service.goal_progress(session, goal)
    response = GoalResponse.model_validate(goal).model_copy(
        update={
            "current_value": progress.current_value,
            "progress": progress.progress,
            "status": progress.status,
        }
    )
    return response.model_dump(mode="json", by_alias=True)


@router.get("")
async def list_goals(
    status_filter: Literal["all", "active", "completed", "failed"] = Query("all", alias="status"),
    user_id: int = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    """List the caller's goals with live progress"""
    goals = [goal_with_progress(session, goal) for goal in crud.get_goals(session, user_id)]
    if status_filter != "all":
        goals = [goal for goal in goals if goal["status"] == status_filter]
    goals.sort(key=lambda goal: (STATUS_ORDER[GoalStatus(goal["status"])], goal["endDate"]))
    return {"goals": goals}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal: GoalCreate,
    user_id: int = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    db_goal = crud.create_goal(session, user_id, goal)
    return {"message": "สร้างเป้าหมายสำเร็จ", "goal": goal_with_progress(session, db_goal)}


@router.get("/{goal_id}")
async def get_goal(
    goal_id: int,
    user_id: int = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    db_goal = crud.get_goal(session, user_id, goal_id)
    if not db_goal:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return {"goal": goal_with_progress(session, db_goal)}


@router.delete("/{goal_id}")
async def delete_goal(
    goal_id: int,
    user_id: int = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    db_goal = crud.get_goal(session, user_id, goal_id)
    if not db_goal:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    crud.delete_goal(session, db_goal)
    return {"message": "ลบเป้าหมายสำเร็จ"}
