from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from fittrack.models.base import NaiveDateTime, utc_now

class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=50)
    email: str = Field(unique=True, index=True)
    hashed_password: str

    # Profile information
    name: Optional[str] = Field(default=None, max_length=100)
    avatar_url: Optional[str] = None

    created_at: datetime = Field(default_factory=utc_now, sa_type=NaiveDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=NaiveDateTime)
