from pydantic import Field
from typing import Optional
from datetime import datetime

from fittrack.models.goal import GoalTargetType, GoalPeriod, GoalStatus
from fittrack.schemas.base import CamelModel

class GoalCreate(CamelModel):
    title: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    target_type: GoalTargetType
    target_value: float = Field(gt=0)
    period: GoalPeriod

class GoalResponse(CamelModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    target_type: GoalTargetType
    target_value: float
    period: GoalPeriod
    start_date: datetime
    end_date: datetime
    status: GoalStatus
    current_value: float = 0
    progress: float = 0
    created_at: datetime
