from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime, timezone

from fittrack.models.workout import Intensity
from fittrack.schemas.base import CamelModel

def to_naive_utc(value: datetime) -> datetime:
    """Store every timestamp as naive UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value

class WorkoutCreate(CamelModel):
    exercise_type: str = Field(min_length=1)
    duration_minutes: int = Field(ge=1, le=1440)
    calories_burned: float = Field(ge=0, le=9999.99)
    distance_km: Optional[float] = Field(default=None, ge=0, le=999.99)
    intensity: Intensity = Intensity.MEDIUM
    notes: Optional[str] = None
    exercise_date: datetime

    @field_validator("exercise_type")
    @classmethod
    def strip_exercise_type(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("กรุณาเลือกประเภทการออกกำลังกาย")
        return value

    @field_validator("exercise_date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

class WorkoutUpdate(WorkoutCreate):
    # PUT replaces every field, intensity included
    intensity: Intensity

class WorkoutResponse(CamelModel):
    id: int
    user_id: int
    exercise_type: str
    duration_minutes: int
    calories_burned: float
    distance_km: Optional[float] = None
    intensity: Intensity
    notes: Optional[str] = None
    exercise_date: datetime
    created_at: datetime
    updated_at: datetime

class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int

class WorkoutListResponse(CamelModel):
    workouts: List[WorkoutResponse]
    pagination: Pagination
