from datetime import datetime
from typing import List, Optional

from sqlmodel import Session, select

from fittrack.models.base import utc_now
from fittrack.models.goal import Goal
from fittrack.schemas.goal import GoalCreate
from fittrack.services.stats_service import goal_window

def get_goal(session: Session, user_id: int, goal_id: int) -> Optional[Goal]:
    """Get a goal by ID, only if it belongs to the user"""
    query = select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
    return session.exec(query).first()

def get_goals(session: Session, user_id: int) -> List[Goal]:
    """Get all of a user's goals, soonest deadline first"""
    query = select(Goal).where(Goal.user_id == user_id).order_by(Goal.end_date, Goal.id)
    return list(session.exec(query).all())

def create_goal(session: Session, user_id: int, goal: GoalCreate, now: Optional[datetime] = None) -> Goal:
    """Create a goal whose window is fixed from its period at creation time"""
    start_date, end_date = goal_window(goal.period, now or utc_now())
    db_goal = Goal(
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
        **goal.model_dump(),
    )
    session.add(db_goal)
    session.commit()
    session.refresh(db_goal)
    return db_goal

def delete_goal(session: Session, db_goal: Goal) -> None:
    session.delete(db_goal)
    session.commit()
