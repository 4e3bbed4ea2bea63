from datetime import datetime, timedelta

from sqlalchemy import DateTime

from fittrack.models import Goal, GoalPeriod, GoalTargetType, User, Workout
from fittrack.models.base import utc_now

TIMESTAMP_COLUMNS = {
    User: ("created_at", "updated_at"),
    Workout: ("exercise_date", "created_at", "updated_at"),
    Goal: ("start_date", "end_date", "created_at", "updated_at"),
}


def test_timestamp_columns_are_plain_naive_datetimes():
    for model, names in TIMESTAMP_COLUMNS.items():
        for name in names:
            column_type = model.__table__.columns[name].type
            assert type(column_type) is DateTime, f"{model.__name__}.{name}"
            assert column_type.timezone is False


def test_utc_now_is_naive():
    assert utc_now().tzinfo is None


def test_rows_round_trip_naive_timestamps(session):
    user = User(username="alice", email="alice@x.com", hashed_password="x")
    session.add(user)
    session.commit()
    session.refresh(user)

    assert user.created_at.tzinfo is None
    assert abs(utc_now() - user.created_at) < timedelta(minutes=1)

    when = datetime(2026, 10, 18, 7, 0)
    workout = Workout(
        user_id=user.id,
        exercise_type="วิ่ง",
        duration_minutes=30,
        calories_burned=200,
        exercise_date=when,
    )
    goal = Goal(
        user_id=user.id,
        title="g",
        target_type=GoalTargetType.WORKOUTS,
        target_value=3,
        period=GoalPeriod.DAILY,
        start_date=when,
        end_date=when + timedelta(days=1),
    )
    session.add(workout)
    session.add(goal)
    session.commit()
    session.refresh(workout)
    session.refresh(goal)

    assert workout.exercise_date == when
    assert goal.end_date == when + timedelta(days=1)
