from fastapi import Request
from sqlmodel import SQLModel, create_engine, Session
from fittrack.config import settings

def build_engine(database_url: str, echo: bool = False):
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, echo=echo, connect_args=connect_args)

engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

def create_db_and_tables(bind=None):
    # Table classes register themselves on import
    from fittrack import models  # noqa: F401
    SQLModel.metadata.create_all(bind or engine)

def get_session(request: Request):
    """Yield a session on the engine of the app serving this request"""
    with Session(request.app.state.engine) as session:
        yield session
