from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from fittrack.models.base import NaiveDateTime, utc_now
from enum import Enum as PyEnum

class GoalTargetType(str, PyEnum):
    WORKOUTS = "workouts"
    CALORIES = "calories"
    DURATION = "duration"
    DISTANCE = "distance"

class GoalPeriod(str, PyEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

class GoalStatus(str, PyEnum):
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"

class Goal(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)

    # Goal details
    title: str = Field(max_length=100)
    description: Optional[str] = None
    target_type: GoalTargetType
    target_value: float
    period: GoalPeriod

    # Window fixed at creation
    start_date: datetime = Field(sa_type=NaiveDateTime)
    end_date: datetime = Field(sa_type=NaiveDateTime)

    # Only ever written as ACTIVE; the effective status is computed on read
    status: GoalStatus = Field(default=GoalStatus.ACTIVE)

    created_at: datetime = Field(default_factory=utc_now, sa_type=NaiveDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=NaiveDateTime)
