import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from fittrack import models  # noqa: F401
from fittrack.config import Settings
from fittrack.database import get_session
from fittrack.main import create_app

TEST_SECRET = "test-secret"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def test_settings():
    return Settings(SECRET_KEY=TEST_SECRET, DATABASE_URL="sqlite://")


@pytest.fixture
def app(engine, test_settings):
    app = create_app(test_settings)

    def get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_user(client):
    """Register and log in a user, returning bearer headers.

    The session cookie set by login is dropped so every request states its
    identity explicitly through the headers.
    """

    def _make_user(username="alice", email="alice@x.com", password="password1"):
        resp = client.post(
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        client.cookies.clear()
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _make_user
