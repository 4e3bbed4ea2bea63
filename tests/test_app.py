from fastapi.testclient import TestClient

from fittrack.main import create_app


def test_unexpected_error_returns_generic_envelope(app):
    @app.get("/api/explode")
    async def explode():
        raise RuntimeError("boom")

    client = TestClient(app, raise_server_exceptions=False)
    resp = client.get("/api/explode")

    assert resp.status_code == 500
    assert resp.json() == {"error": "เกิดข้อผิดพลาด"}


def test_unknown_api_route_uses_error_envelope(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert "error" in resp.json()


def test_app_uses_database_from_settings(tmp_path, test_settings):
    db_path = tmp_path / "fittrack-test.db"
    app = create_app(test_settings.model_copy(update={"DATABASE_URL": f"sqlite:///{db_path}"}))

    assert str(app.state.engine.url).endswith("fittrack-test.db")

    with TestClient(app) as client:
        resp = client.post(
            "/api/auth/register",
            json={"username": "alice", "email": "alice@x.com", "password": "password1"},
        )
        assert resp.status_code == 201

    assert db_path.exists()
    app.state.engine.dispose()
