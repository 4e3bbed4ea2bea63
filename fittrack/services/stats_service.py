import calendar
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlmodel import Session, select

from fittrack.crud.workout import get_recent_workouts, get_workouts_between
from fittrack.models.base import utc_now
from fittrack.models.goal import Goal, GoalPeriod, GoalStatus, GoalTargetType
from fittrack.models.workout import Intensity, Workout

THAI_WEEKDAYS = ("จ.", "อ.", "พ.", "พฤ.", "ศ.", "ส.", "อา.")  # Monday first
THAI_MONTHS = (
    "ม.ค.", "ก.พ.", "มี.ค.", "เม.ย.", "พ.ค.", "มิ.ย.",
    "ก.ค.", "ส.ค.", "ก.ย.", "ต.ค.", "พ.ย.", "ธ.ค.",
)
INTENSITY_ORDER = (Intensity.LOW, Intensity.MEDIUM, Intensity.HIGH)


def js_round(value: float) -> int:
    """Round half up, the way the dashboard always has."""
    return math.floor(value + 0.5)


def percent_change(current: float, previous: float) -> int:
    """Week-over-week change in percent; a zero baseline reads as 100 or 0."""
    if previous == 0:
        return 100 if current > 0 else 0
    return js_round((current - previous) / previous * 100)


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=23, minute=59, second=59, microsecond=999999)


def add_months(moment: datetime, months: int) -> datetime:
    """Shift by whole months, clamping the day to the target month's length."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def goal_window(period: GoalPeriod, now: datetime) -> Tuple[datetime, datetime]:
    """Return the [start, end] window a goal created at ``now`` covers."""
    start = start_of_day(now)
    if period == GoalPeriod.DAILY:
        end = end_of_day(now)
    elif period == GoalPeriod.MONTHLY:
        end = end_of_day(add_months(now, 1))
    else:
        end = end_of_day(now + timedelta(weeks=1))
    return start, end


@dataclass
class GoalProgress:
    current_value: float
    progress: float
    status: GoalStatus


GOAL_METRICS = {
    GoalTargetType.CALORIES: Workout.calories_burned,
    GoalTargetType.DURATION: Workout.duration_minutes,
    GoalTargetType.DISTANCE: Workout.distance_km,
}


class StatsService:
    """Read-side statistics over a single user's workouts.

    Every query filters on the ``user_id`` handed in by the caller, which the
    API layer only ever takes from a verified token.
    """

    def _totals(
        self,
        session: Session,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        query = select(
            func.count(Workout.id),
            func.coalesce(func.sum(Workout.calories_burned), 0),
            func.coalesce(func.sum(Workout.duration_minutes), 0),
            func.coalesce(func.sum(Workout.distance_km), 0),
        ).where(Workout.user_id == user_id)
        if start is not None:
            query = query.where(Workout.exercise_date >= start)
        if end is not None:
            query = query.where(Workout.exercise_date < end)

        count, calories, duration, distance = session.exec(query).one()
        return {
            "workouts": count,
            "calories": round(float(calories), 2),
            "duration": int(duration),
            "distance": round(float(distance), 2),
        }

    def summary(self, session: Session, user_id: int, now: Optional[datetime] = None) -> Dict[str, Any]:
        now = now or utc_now()
        week_ago = now - timedelta(days=7)
        two_weeks_ago = week_ago - timedelta(days=7)

        total = self._totals(session, user_id)
        this_week = self._totals(session, user_id, start=week_ago)
        prev_week = self._totals(session, user_id, start=two_weeks_ago, end=week_ago)

        return {
            "total": total,
            "thisWeek": this_week,
            "changes": {
                key: percent_change(this_week[key], prev_week[key])
                for key in ("workouts", "calories", "duration", "distance")
            },
        }

    def daily_chart(self, session: Session, user_id: int, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """Calories and workout count for each of the last 7 days, oldest first."""
        today = start_of_day(now or utc_now())
        first_day = today - timedelta(days=6)
        workouts = get_workouts_between(session, user_id, first_day, today + timedelta(days=1))

        by_day: Dict[str, List[Workout]] = {}
        for workout in workouts:
            by_day.setdefault(workout.exercise_date.date().isoformat(), []).append(workout)

        chart = []
        for offset in range(6, -1, -1):
            day = today - timedelta(days=offset)
            key = day.date().isoformat()
            day_workouts = by_day.get(key, [])
            chart.append({
                "date": key,
                "label": THAI_WEEKDAYS[day.weekday()],
                "calories": js_round(sum(w.calories_burned for w in day_workouts)),
                "workouts": len(day_workouts),
            })
        return chart

    def monthly(self, session: Session, user_id: int, now: Optional[datetime] = None, months: int = 6) -> List[Dict[str, Any]]:
        """Totals for each of the last ``months`` calendar months, oldest first."""
        this_month = start_of_day(now or utc_now()).replace(day=1)

        rollup = []
        for offset in range(months - 1, -1, -1):
            month_start = add_months(this_month, -offset)
            month_end = add_months(month_start, 1)
            totals = self._totals(session, user_id, start=month_start, end=month_end)
            rollup.append({
                "month": month_start.strftime("%Y-%m"),
                "label": THAI_MONTHS[month_start.month - 1],
                **totals,
            })
        return rollup

    def breakdown(self, session: Session, user_id: int) -> List[Dict[str, Any]]:
        """Count, calories and minutes per exercise type, most frequent first."""
        query = (
            select(
                Workout.exercise_type,
                func.count(Workout.id),
                func.coalesce(func.sum(Workout.calories_burned), 0),
                func.coalesce(func.sum(Workout.duration_minutes), 0),
            )
            .where(Workout.user_id == user_id)
            .group_by(Workout.exercise_type)
        )
        data = [
            {
                "exerciseType": exercise_type,
                "count": count,
                "calories": round(float(calories), 2),
                "duration": int(duration),
            }
            for exercise_type, count, calories, duration in session.exec(query).all()
        ]
        data.sort(key=lambda row: (-row["count"], row["exerciseType"]))
        return data

    def intensity(self, session: Session, user_id: int) -> List[Dict[str, Any]]:
        query = (
            select(
                Workout.intensity,
                func.count(Workout.id),
                func.coalesce(func.sum(Workout.calories_burned), 0),
                func.coalesce(func.sum(Workout.duration_minutes), 0),
            )
            .where(Workout.user_id == user_id)
            .group_by(Workout.intensity)
        )
        rows = {Intensity(level): (count, calories, duration) for level, count, calories, duration in session.exec(query).all()}
        return [
            {
                "intensity": level.value,
                "count": rows[level][0],
                "calories": round(float(rows[level][1]), 2),
                "duration": int(rows[level][2]),
            }
            for level in INTENSITY_ORDER
            if level in rows
        ]

    def recent(self, session: Session, user_id: int, limit: int = 5) -> List[Workout]:
        return get_recent_workouts(session, user_id, limit=limit)

    def goal_current_value(self, session: Session, goal: Goal) -> float:
        """Sum the goal's metric over the owner's workouts inside the goal window."""
        if goal.target_type == GoalTargetType.WORKOUTS:
            aggregate = func.count(Workout.id)
        else:
            aggregate = func.coalesce(func.sum(GOAL_METRICS[goal.target_type]), 0)

        query = select(aggregate).where(
            Workout.user_id == goal.user_id,
            Workout.exercise_date >= goal.start_date,
            Workout.exercise_date <= goal.end_date,
        )
        return round(float(session.exec(query).one()), 2)

    def goal_progress(self, session: Session, goal: Goal, now: Optional[datetime] = None) -> GoalProgress:
        now = now or utc_now()
        current = self.goal_current_value(session, goal)
        progress = round(min(100.0, current / goal.target_value * 100), 2)

        if progress >= 100:
            status = GoalStatus.COMPLETED
        elif now > goal.end_date:
            status = GoalStatus.FAILED
        else:
            status = GoalStatus.ACTIVE
        return GoalProgress(current_value=current, progress=progress, status=status)
