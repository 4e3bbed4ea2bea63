import csv
import io

import pytest


@pytest.fixture
def headers(client, make_user):
    headers = make_user()
    client.post(
        "/api/workouts",
        headers=headers,
        json={
            "exerciseType": "ว่ายน้ำ",
            "durationMinutes": 45,
            "caloriesBurned": 350,
            "distanceKm": 1.5,
            "intensity": "high",
            "notes": "สระ, เช้า",
            "exerciseDate": "2026-10-18T07:00:00",
        },
    )
    client.post(
        "/api/workouts",
        headers=headers,
        json={
            "exerciseType": "โยคะ",
            "durationMinutes": 60,
            "caloriesBurned": 150.5,
            "intensity": "low",
            "exerciseDate": "2026-01-05T18:00:00",
        },
    )
    client.post(
        "/api/goals",
        headers=headers,
        json={"title": "g", "targetType": "workouts", "targetValue": 3, "period": "weekly"},
    )
    return headers


def test_json_export(client, headers):
    resp = client.get("/api/export", headers=headers)
    assert resp.status_code == 200
    assert resp.headers["content-disposition"] == 'attachment; filename="fitness-data.json"'

    data = resp.json()
    assert data["user"]["email"] == "alice@x.com"
    assert data["totalWorkouts"] == 2
    assert data["totalGoals"] == 1
    assert [w["exerciseType"] for w in data["workouts"]] == ["ว่ายน้ำ", "โยคะ"]
    assert data["goals"][0]["title"] == "g"
    assert "exportedAt" in data


def test_csv_export(client, headers):
    resp = client.get("/api/export", headers=headers, params={"format": "csv"})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert resp.headers["content-disposition"] == 'attachment; filename="fitness-data.csv"'

    rows = list(csv.reader(io.StringIO(resp.text)))
    assert rows[0] == ["วันที่", "ประเภท", "ระยะเวลา(นาที)", "แคลอรี่", "ระยะทาง(km)", "ความหนัก", "หมายเหตุ"]
    assert rows[1] == ["18/10/2569", "ว่ายน้ำ", "45", "350", "1.5", "high", "สระ, เช้า"]
    assert rows[2] == ["5/1/2569", "โยคะ", "60", "150.5", "", "low", ""]


def test_export_rejects_unknown_format(client, headers):
    assert client.get("/api/export", headers=headers, params={"format": "xml"}).status_code == 400


def test_export_contains_only_own_data(client, headers, make_user):
    bob = make_user("bob", "bob@x.com")
    data = client.get("/api/export", headers=bob).json()
    assert data["totalWorkouts"] == 0
    assert data["totalGoals"] == 0

    rows = list(csv.reader(io.StringIO(client.get("/api/export", headers=bob, params={"format": "csv"}).text)))
    assert len(rows) == 1
