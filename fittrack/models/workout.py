from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from fittrack.models.base import NaiveDateTime, utc_now
from enum import Enum

# Values offered by the client's exercise picker; the column itself is free-form.
EXERCISE_TYPES = (
    "วิ่ง",
    "เดิน",
    "ปั่นจักรยาน",
    "ว่ายน้ำ",
    "ยิม",
    "โยคะ",
    "แอโรบิก",
    "กีฬาทีม",
    "อื่นๆ",
)

class Intensity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class Workout(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)

    # Workout Details
    exercise_type: str = Field(index=True)
    duration_minutes: int  # 1-1440
    calories_burned: float  # 0-9999.99
    distance_km: Optional[float] = None  # 0-999.99
    intensity: Intensity = Field(default=Intensity.MEDIUM)
    notes: Optional[str] = None
    exercise_date: datetime = Field(index=True, sa_type=NaiveDateTime)

    created_at: datetime = Field(default_factory=utc_now, sa_type=NaiveDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=NaiveDateTime)
