from datetime import datetime, timezone

from sqlalchemy import DateTime


def utc_now() -> datetime:
    """Current time as naive UTC, the form every timestamp column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Timestamp columns hold naive UTC; SQLModel's default may require tz-aware values
NaiveDateTime = DateTime(timezone=False)
