import csv
import io
from datetime import datetime
from typing import Any, Dict, List

from fittrack.models.base import utc_now
from fittrack.models.goal import Goal
from fittrack.models.user import User
from fittrack.models.workout import Workout
from fittrack.schemas.goal import GoalResponse
from fittrack.schemas.user import UserResponse
from fittrack.schemas.workout import WorkoutResponse

CSV_HEADER = ["วันที่", "ประเภท", "ระยะเวลา(นาที)", "แคลอรี่", "ระยะทาง(km)", "ความหนัก", "หมายเหตุ"]


def thai_date(moment: datetime) -> str:
    """Format a date the way th-TH renders it: d/m/yyyy in the Buddhist era."""
    return f"{moment.day}/{moment.month}/{moment.year + 543}"


def _number(value: float) -> str:
    return f"{value:g}"


def build_json_export(user: User, workouts: List[Workout], goals: List[Goal]) -> Dict[str, Any]:
    return {
        "user": UserResponse.model_validate(user).model_dump(mode="json", by_alias=True),
        "workouts": [WorkoutResponse.model_validate(w).model_dump(mode="json", by_alias=True) for w in workouts],
        "goals": [
            GoalResponse.model_validate(g).model_dump(
                mode="json", by_alias=True, exclude={"current_value", "progress"}
            )
            for g in goals
        ],
        "exportedAt": utc_now().isoformat() + "Z",
        "totalWorkouts": len(workouts),
        "totalGoals": len(goals),
    }


def build_csv_export(workouts: List[Workout]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for w in workouts:
        writer.writerow([
            thai_date(w.exercise_date),
            w.exercise_type,
            w.duration_minutes,
            _number(w.calories_burned),
            _number(w.distance_km) if w.distance_km is not None else "",
            w.intensity.value,
            w.notes or "",
        ])
    return buffer.getvalue()
