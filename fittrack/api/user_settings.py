from fastapi import APIRouter, Depends

from fittrack.api.deps import get_current_user
from fittrack.models.user import User
from fittrack.schemas.settings import SettingsUpdate, default_settings

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
async def get_user_settings(current_user: User = Depends(get_current_user)):
    """Settings are not stored yet; every user gets the defaults"""
    return {"settings": default_settings(current_user.id)}


@router.put("")
async def update_user_settings(
    update: SettingsUpdate,
    current_user: User = Depends(get_current_user),
):
    # Validated and echoed back only, nothing is persisted
    return {
        "message": "บันทึกการตั้งค่าสำเร็จ",
        "settings": update.model_dump(mode="json", by_alias=True, exclude_unset=True),
    }
