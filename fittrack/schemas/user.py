from pydantic import EmailStr, Field, HttpUrl, ValidationInfo, field_validator
from typing import Optional
from datetime import datetime

from fittrack.schemas.base import CamelModel

DELETE_CONFIRMATION = "DELETE"

class UserCreate(CamelModel):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8)

    @field_validator("username")
    @classmethod
    def strip_username(cls, value: str) -> str:
        return value.strip()

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()

class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()

class UserResponse(CamelModel):
    id: int
    username: str
    email: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime

class ProfileResponse(UserResponse):
    total_workouts: int = 0
    total_calories: float = 0
    total_duration: int = 0
    total_distance: float = 0

class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    avatar_url: Optional[HttpUrl] = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: Optional[str]) -> str:
        # Runs only when the field is sent; an explicit null cannot clear the email
        if value is None:
            raise ValueError("กรุณากรอกอีเมล")
        return value.lower()

class PasswordChange(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=8)
    confirm_password: str = Field(min_length=1)

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        if value != info.data.get("new_password"):
            raise ValueError("รหัสผ่านไม่ตรงกัน")
        return value

class AccountDelete(CamelModel):
    password: str = Field(min_length=1)
    confirm_text: str

    @field_validator("confirm_text")
    @classmethod
    def must_type_delete(cls, value: str) -> str:
        if value != DELETE_CONFIRMATION:
            raise ValueError("กรุณาพิมพ์ DELETE เพื่อยืนยัน")
        return value
