from datetime import datetime, timezone

from sqlmodel import select

from fittrack.models import User


def test_register_returns_created_user(client):
    resp = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "alice@x.com", "password": "password1"},
    )
    assert resp.status_code == 201
    user = resp.json()["user"]
    assert user["username"] == "alice"
    assert user["email"] == "alice@x.com"
    assert "createdAt" in user
    assert "hashedPassword" not in user and "password" not in user


def test_register_validation_error_has_details(client):
    resp = client.post(
        "/api/auth/register",
        json={"username": "al", "email": "not-an-email", "password": "short"},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "ข้อมูลไม่ถูกต้อง"
    paths = {tuple(detail["path"]) for detail in body["details"]}
    assert {("username",), ("email",), ("password",)} <= paths


def test_register_duplicate_email_conflicts(client, make_user):
    make_user()
    resp = client.post(
        "/api/auth/register",
        json={"username": "alice2", "email": "ALICE@x.com", "password": "password1"},
    )
    assert resp.status_code == 409
    assert resp.json() == {"error": "Email หรือ Username นี้ถูกใช้แล้ว"}


def test_register_duplicate_username_conflicts_regardless_of_case(client, make_user):
    make_user()
    resp = client.post(
        "/api/auth/register",
        json={"username": "Alice", "email": "other@x.com", "password": "password1"},
    )
    assert resp.status_code == 409


def test_login_returns_token_and_sets_cookie(client, make_user):
    make_user()
    resp = client.post("/api/auth/login", json={"email": "alice@x.com", "password": "password1"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["user"]["username"] == "alice"
    assert body["token"]
    assert resp.cookies.get("token") == body["token"]


def test_login_wrong_password(client, make_user):
    make_user()
    resp = client.post("/api/auth/login", json={"email": "alice@x.com", "password": "wrong-password"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "อีเมลหรือรหัสผ่านไม่ถูกต้อง"}


def test_login_unknown_email(client):
    resp = client.post("/api/auth/login", json={"email": "nobody@x.com", "password": "password1"})
    assert resp.status_code == 401


def test_me_with_bearer_header(client, make_user):
    headers = make_user()
    resp = client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["user"]["email"] == "alice@x.com"


def test_me_with_session_cookie(client, make_user):
    make_user()
    client.post("/api/auth/login", json={"email": "alice@x.com", "password": "password1"})
    resp = client.get("/api/auth/me")
    assert resp.status_code == 200
    assert resp.json()["user"]["username"] == "alice"


def test_me_without_token(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"error": "ไม่พบ token"}


def test_me_with_invalid_token(client):
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Token ไม่ถูกต้อง"}


def test_logout_clears_cookie(client, make_user):
    make_user()
    client.post("/api/auth/login", json={"email": "alice@x.com", "password": "password1"})
    resp = client.post("/api/auth/logout")
    assert resp.status_code == 200
    assert "token=" in resp.headers["set-cookie"]
    assert client.get("/api/auth/me").status_code == 401


def test_end_to_end_summary(client, make_user):
    headers = make_user()
    resp = client.post(
        "/api/workouts",
        headers=headers,
        json={
            "exerciseType": "วิ่ง",
            "durationMinutes": 30,
            "caloriesBurned": 200,
            "intensity": "medium",
            "exerciseDate": datetime.now(timezone.utc).isoformat(),
        },
    )
    assert resp.status_code == 201

    summary = client.get("/api/stats/summary", headers=headers).json()
    assert summary["total"]["workouts"] == 1
    assert summary["total"]["calories"] == 200
    assert summary["thisWeek"]["workouts"] == 1
    assert summary["changes"]["workouts"] == 100


def test_register_race_on_unique_index_conflicts(client, make_user, monkeypatch):
    make_user()
    # Simulate a concurrent registration that slipped past the pre-check
    monkeypatch.setattr("fittrack.api.auth.find_conflicting_user", lambda *args: None)

    resp = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "alice@x.com", "password": "password1"},
    )
    assert resp.status_code == 409
    assert resp.json() == {"error": "Email หรือ Username นี้ถูกใช้แล้ว"}

    # The session is usable again after the rollback
    resp = client.post(
        "/api/auth/register",
        json={"username": "bob", "email": "bob@x.com", "password": "password1"},
    )
    assert resp.status_code == 201


def test_login_with_corrupt_stored_hash_is_rejected(client, session, make_user):
    make_user()
    user = session.exec(select(User).where(User.email == "alice@x.com")).one()
    user.hashed_password = "pbkdf2_sha256$lots$nothex$nothex"
    session.add(user)
    session.commit()

    resp = client.post("/api/auth/login", json={"email": "alice@x.com", "password": "password1"})
    assert resp.status_code == 401
