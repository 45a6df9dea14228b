from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from escape_room.core.escape_room_manager import EscapeRoomManager
from escape_room.core.question_bank import QuestionBank
from escape_room.server.api_server import create_api_app

from fakes import make_bank


@pytest.fixture
def manager(tmp_path) -> EscapeRoomManager:
    bank = QuestionBank(source_dir=tmp_path, levels={1: make_bank(8), 2: make_bank(8), 3: make_bank(8)})
    return EscapeRoomManager(bank, rules=["Stay in fullscreen."], admin_username="Admin", admin_password="s3cret")


@pytest.fixture
def client(manager) -> TestClient:
    return TestClient(create_api_app(manager))


def login(client, name="Ada", college="MIT") -> int:
    response = client.post("/api/login", json={"studentName": name, "collegeName": college})
    assert response.status_code == 200
    return response.json()["studentID"]


def submit(client, student_id, level, score, time_taken, total=8):
    return client.post(
        "/api/submit-score",
        json={
            "studentID": student_id,
            "level": level,
            "score": score,
            "timeTaken": time_taken,
            "totalQuestions": total,
        },
    )


def test_ping(client):
    response = client.get("/ping")
    assert response.status_code == 200
    assert response.text == "pong"


def test_login_issues_ids(client):
    first = client.post("/api/login", json={"studentName": "Ada", "collegeName": "MIT"}).json()
    second = login(client, "Grace")

    assert first == {"studentID": 1, "currentLevel": 1}
    assert second == 2


def test_login_requires_both_fields(client):
    response = client.post("/api/login", json={"studentName": "  ", "collegeName": "MIT"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing fields"


def test_questions_are_grouped_by_level(client):
    body = client.get("/api/questions").json()

    assert sorted(body) == ["level1", "level2", "level3"]
    assert set(body["level1"][0]) == {"id", "text", "choices", "answerIndex"}


def test_submit_and_read_back_score(client):
    student_id = login(client)

    assert submit(client, student_id, 2, 6, 50).json() == {"message": "Score saved"}
    assert client.get(f"/api/player-score/{student_id}/2").json() == {
        "score": 6,
        "timeTaken": 50,
        "totalQuestions": 8,
    }


def test_resubmission_overwrites(client):
    student_id = login(client)
    submit(client, student_id, 1, 2, 100)
    submit(client, student_id, 1, 5, 90)

    assert client.get(f"/api/player-score/{student_id}/1").json()["score"] == 5


def test_unknown_student_and_missing_score(client):
    assert submit(client, 999, 1, 3, 10).status_code == 404
    assert client.get("/api/player-score/999/1").status_code == 404


def test_invalid_score_is_rejected(client):
    student_id = login(client)

    assert submit(client, student_id, 1, 9, 10).status_code == 400
    assert submit(client, student_id, 7, 1, 10).status_code == 400
    assert submit(client, student_id, 1, 1, -5).status_code == 400


def test_leaderboard_orders_by_score_then_time(client):
    slow = login(client, "Slow")
    fast = login(client, "Fast")
    low = login(client, "Low")
    submit(client, slow, 1, 7, 200)
    submit(client, fast, 1, 7, 120)
    submit(client, low, 1, 3, 30)

    rows = client.get("/api/leaderboard/1").json()

    assert [row["name"] for row in rows] == ["Fast", "Slow", "Low"]
    assert rows[0] == {"id": str(fast), "name": "Fast", "college": "MIT", "score": 7, "total": 8, "timeTaken": 120}


def test_level_three_requires_level_two_qualification(client):
    student_id = login(client)
    def check(level):
        response = client.get("/api/check-eligibility", params={"studentID": student_id, "level": level})
        return response.json()["eligible"]

    assert check(2) is True
    assert check(3) is False
    submit(client, student_id, 2, 5, 60)
    assert check(3) is False
    submit(client, student_id, 2, 6, 60)
    assert check(3) is True


def test_eligibility_without_parameters(client):
    assert client.get("/api/check-eligibility").json() == {"eligible": False}


def test_rules(client):
    assert client.get("/api/rules").json() == {"rules": ["Stay in fullscreen."]}


def test_admin_login_and_reset(client):
    student_id = login(client)
    submit(client, student_id, 1, 4, 40)

    assert client.post("/api/admin/login", json={"username": "admin", "password": "nope"}).status_code == 401
    token = client.post("/api/admin/login", json={"username": " ADMIN ", "password": " s3cret "}).json()["token"]

    response = client.post("/api/admin/reset", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert client.get("/api/leaderboard/1").json() == []


@pytest.mark.parametrize(
    "headers, detail",
    [
        ({}, "No token provided"),
        ({"Authorization": "Token abc"}, "Malformed token"),
        ({"Authorization": "Bearer abc"}, "Invalid or expired token"),
    ],
)
def test_reset_requires_valid_token(client, headers, detail):
    response = client.post("/api/admin/reset", headers=headers)

    assert response.status_code == 401
    assert response.json()["detail"] == detail
