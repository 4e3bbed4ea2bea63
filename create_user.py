import logging

from sqlmodel import Session

from fittrack.crud.user import create_user, find_conflicting_user
from fittrack.database import create_db_and_tables, engine
from fittrack.logging_config import configure_logging
from fittrack.schemas.user import UserCreate

logger = logging.getLogger("create_user")

def create_initial_user():
    create_db_and_tables()
    user_data = UserCreate(
        username="alice",
        email="alice@x.com",
        password="password1",
    )
    with Session(engine) as session:
        if find_conflicting_user(session, user_data.email, user_data.username):
            logger.info("User %s already exists", user_data.email)
            return
        user = create_user(session, user_data)
        logger.info("User created successfully: %s", user.email)

if __name__ == "__main__":
    configure_logging()
    create_initial_user()
