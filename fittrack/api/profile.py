import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlmodel import Session

from fittrack.api.auth import clear_session_cookie
from fittrack.api.deps import get_app_settings, get_current_user
from fittrack.config import Settings
from fittrack.crud.user import UserConflictError, delete_user, email_taken_by_other, set_password, update_user
from fittrack.database import get_session
from fittrack.models.user import User
from fittrack.schemas.user import (
    AccountDelete,
    PasswordChange,
    ProfileResponse,
    ProfileUpdate,
    UserResponse,
)
from fittrack.services.security import verify_password
from fittrack.services.stats_service import StatsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])
stats_service = StatsService()

EMAIL_IN_USE = "อีเมลนี้ถูกใช้งานแล้ว"


@router.get("")
async def get_profile(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Get the caller's profile together with lifetime totals"""
    totals = stats_service.summary(session, current_user.id)["total"]
    profile = ProfileResponse.model_validate(current_user).model_copy(
        update={
            "total_workouts": totals["workouts"],
            "total_calories": totals["calories"],
            "total_duration": totals["duration"],
            "total_distance": totals["distance"],
        }
    )
    return {"user": profile.model_dump(mode="json", by_alias=True)}


@router.put("")
async def update_profile(
    update: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    if update.email and email_taken_by_other(session, update.email, current_user.id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=EMAIL_IN_USE)

    try:
        db_user = update_user(session, current_user, update)
    except UserConflictError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=EMAIL_IN_USE)
    return {
        "message": "อัปเดตโปรไฟล์สำเร็จ",
        "user": UserResponse.model_validate(db_user).model_dump(mode="json", by_alias=True),
    }


@router.post("/password")
async def change_password(
    change: PasswordChange,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    if not verify_password(change.current_password, current_user.hashed_password):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="รหัสผ่านปัจจุบันไม่ถูกต้อง")

    set_password(session, current_user, change.new_password)
    return {"message": "เปลี่ยนรหัสผ่านสำเร็จ"}


@router.post("/delete")
async def delete_account(
    confirmation: AccountDelete,
    response: Response,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
    app_settings: Settings = Depends(get_app_settings),
):
    """Delete the caller's account and everything it owns"""
    if not verify_password(confirmation.password, current_user.hashed_password):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="รหัสผ่านไม่ถูกต้อง")

    delete_user(session, current_user)
    clear_session_cookie(response, app_settings)
    return {"message": "ลบบัญชีสำเร็จ"}
