import math
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlmodel import Session, select

from fittrack.models.base import utc_now
from fittrack.models.workout import Workout
from fittrack.schemas.workout import WorkoutCreate, WorkoutUpdate

# Query-string sort keys mapped onto columns
SORTABLE_COLUMNS = {
    "exerciseDate": Workout.exercise_date,
    "caloriesBurned": Workout.calories_burned,
    "durationMinutes": Workout.duration_minutes,
    "distanceKm": Workout.distance_km,
    "createdAt": Workout.created_at,
}

def get_workout(session: Session, user_id: int, workout_id: int) -> Optional[Workout]:
    """Get a workout by ID, only if it belongs to the user"""
    query = select(Workout).where(Workout.id == workout_id, Workout.user_id == user_id)
    return session.exec(query).first()

def get_workouts(
    session: Session,
    user_id: int,
    page: int = 1,
    limit: int = 10,
    exercise_type: Optional[str] = None,
    sort_by: str = "exerciseDate",
    sort_order: str = "desc",
) -> Tuple[List[Workout], int]:
    """Get one page of a user's workouts plus the total matching count"""
    conditions = [Workout.user_id == user_id]
    if exercise_type:
        conditions.append(Workout.exercise_type == exercise_type)

    total = session.exec(select(func.count(Workout.id)).where(*conditions)).one()

    column = SORTABLE_COLUMNS[sort_by]
    order = column.asc() if sort_order == "asc" else column.desc()
    query = (
        select(Workout)
        .where(*conditions)
        .order_by(order, Workout.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list(session.exec(query).all()), total

def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0

def get_workouts_between(
    session: Session,
    user_id: int,
    start: datetime,
    end: Optional[datetime] = None,
) -> List[Workout]:
    """Get a user's workouts with start <= exercise_date < end"""
    query = select(Workout).where(Workout.user_id == user_id, Workout.exercise_date >= start)
    if end is not None:
        query = query.where(Workout.exercise_date < end)
    return list(session.exec(query.order_by(Workout.exercise_date)).all())

def get_recent_workouts(session: Session, user_id: int, limit: int = 5) -> List[Workout]:
    """Get the user's most recent workouts"""
    query = (
        select(Workout)
        .where(Workout.user_id == user_id)
        .order_by(Workout.exercise_date.desc(), Workout.id.desc())
        .limit(limit)
    )
    return list(session.exec(query).all())

def get_all_workouts(session: Session, user_id: int) -> List[Workout]:
    query = select(Workout).where(Workout.user_id == user_id).order_by(Workout.exercise_date.desc())
    return list(session.exec(query).all())

def create_workout(session: Session, user_id: int, workout: WorkoutCreate) -> Workout:
    """Create a new workout owned by the user"""
    db_workout = Workout(user_id=user_id, **workout.model_dump())
    session.add(db_workout)
    session.commit()
    session.refresh(db_workout)
    return db_workout

def update_workout(session: Session, db_workout: Workout, workout: WorkoutUpdate) -> Workout:
    """Replace a workout's fields; the owner never changes"""
    for key, value in workout.model_dump().items():
        setattr(db_workout, key, value)
    db_workout.updated_at = utc_now()

    session.add(db_workout)
    session.commit()
    session.refresh(db_workout)
    return db_workout

def delete_workout(session: Session, db_workout: Workout) -> None:
    session.delete(db_workout)
    session.commit()
