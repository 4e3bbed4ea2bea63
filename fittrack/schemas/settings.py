from typing import Literal, Optional

from fittrack.schemas.base import CamelModel

class NotificationSettings(CamelModel):
    email: Optional[bool] = None
    push: Optional[bool] = None
    goal_reminders: Optional[bool] = None
    weekly_report: Optional[bool] = None

class PreferenceSettings(CamelModel):
    language: Optional[Literal["th", "en"]] = None
    week_starts_on: Optional[Literal["sunday", "monday"]] = None
    default_workout_view: Optional[Literal["list", "grid"]] = None

class SettingsUpdate(CamelModel):
    theme: Optional[Literal["light", "dark", "system"]] = None
    notifications: Optional[NotificationSettings] = None
    preferences: Optional[PreferenceSettings] = None

def default_settings(user_id: int) -> dict:
    return {
        "userId": user_id,
        "theme": "light",
        "notifications": {
            "email": True,
            "push": False,
            "goalReminders": True,
            "weeklyReport": True,
        },
        "preferences": {
            "language": "th",
            "weekStartsOn": "monday",
            "defaultWorkoutView": "list",
        },
    }
