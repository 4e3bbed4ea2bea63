import logging
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from fittrack.models.base import utc_now
from fittrack.models.user import User
from fittrack.models.workout import Workout
from fittrack.models.goal import Goal
from fittrack.schemas.user import UserCreate, ProfileUpdate
from fittrack.services.security import hash_password

logger = logging.getLogger(__name__)

class UserConflictError(Exception):
    """Email or username already held by another account"""

def get_user(session: Session, user_id: int) -> Optional[User]:
    """Get a user by ID"""
    return session.get(User, user_id)

def get_user_by_email(session: Session, email: str) -> Optional[User]:
    """Get a user by email, ignoring case"""
    return session.exec(select(User).where(func.lower(User.email) == email.lower())).first()

def find_conflicting_user(session: Session, email: str, username: str) -> Optional[User]:
    """Find a user already holding this email or username (case-insensitive)"""
    query = select(User).where(
        or_(
            func.lower(User.email) == email.lower(),
            func.lower(User.username) == username.lower(),
        )
    )
    return session.exec(query).first()

def email_taken_by_other(session: Session, email: str, user_id: int) -> bool:
    query = select(User).where(func.lower(User.email) == email.lower(), User.id != user_id)
    return session.exec(query).first() is not None

def create_user(session: Session, user: UserCreate) -> User:
    """Create a new user with a hashed password"""
    db_user = User(
        username=user.username,
        email=user.email.lower(),
        hashed_password=hash_password(user.password),
    )
    session.add(db_user)
    try:
        session.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration
        session.rollback()
        raise UserConflictError(user.email) from exc
    session.refresh(db_user)
    logger.info("Registered user %s (id=%s)", db_user.username, db_user.id)
    return db_user

def update_user(session: Session, db_user: User, update: ProfileUpdate) -> User:
    """Apply a partial profile update"""
    data = update.model_dump(exclude_unset=True)
    # email is NOT NULL
    if data.get("email") is None:
        data.pop("email", None)
    if "avatar_url" in data and data["avatar_url"] is not None:
        data["avatar_url"] = str(data["avatar_url"])
    for key, value in data.items():
        setattr(db_user, key, value)
    db_user.updated_at = utc_now()

    session.add(db_user)
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise UserConflictError(data.get("email")) from exc
    session.refresh(db_user)
    return db_user

def set_password(session: Session, db_user: User, new_password: str) -> User:
    db_user.hashed_password = hash_password(new_password)
    db_user.updated_at = utc_now()
    session.add(db_user)
    session.commit()
    session.refresh(db_user)
    return db_user

def delete_user(session: Session, db_user: User) -> None:
    """Delete a user together with every workout and goal they own"""
    user_id = db_user.id
    for workout in session.exec(select(Workout).where(Workout.user_id == user_id)).all():
        session.delete(workout)
    for goal in session.exec(select(Goal).where(Goal.user_id == user_id)).all():
        session.delete(goal)
    session.flush()
    session.delete(db_user)
    session.commit()
    logger.info("Deleted user id=%s and their data", user_id)
