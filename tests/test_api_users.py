import time
import uuid

import pytest
from sqlalchemy.exc import OperationalError

from moodflow.core.exceptions import InvalidCredentialsError
from moodflow.services.user_service import UserService


def test_register_returns_token(client):
    response = client.post("/api/users/register", json={
        "username": "carol",
        "email": "carol@example.com",
        "password": "hunter22",
    })
    assert response.status_code == 201
    data = response.json()
    assert data["username"] == "carol"
    assert data["email"] == "carol@example.com"
    assert data["token"]
    uuid.UUID(data["id"])


def test_register_missing_fields(client):
    response = client.post("/api/users/register", json={"username": "carol"})
    assert response.status_code == 400


def test_register_weak_password(client):
    response = client.post("/api/users/register", json={
        "username": "carol",
        "email": "carol@example.com",
        "password": "12345",
    })
    assert response.status_code == 400
    assert "at least 6 characters" in response.json()["detail"]


def test_register_duplicate_username_or_email(client, alice):
    response = client.post("/api/users/register", json={
        "username": "alice",
        "email": "other@example.com",
        "password": "secret123",
    })
    assert response.status_code == 400

    response = client.post("/api/users/register", json={
        "username": "alice2",
        "email": "alice@example.com",
        "password": "secret123",
    })
    assert response.status_code == 400


def test_login(client, alice):
    response = client.post("/api/users/login", json={"username": "alice", "password": "secret123"})
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == alice["id"]
    assert data["token"]


def test_login_bad_credentials(client, alice):
    response = client.post("/api/users/login", json={"username": "alice", "password": "wrong-pass"})
    assert response.status_code == 401

    response = client.post("/api/users/login", json={"username": "nobody", "password": "secret123"})
    assert response.status_code == 401


def test_failed_login_does_not_sleep(session, alice, monkeypatch):
    def no_sleep(seconds):
        raise AssertionError(f"slept {seconds}s during login")

    monkeypatch.setattr(time, "sleep", no_sleep)
    service = UserService(session)
    with pytest.raises(InvalidCredentialsError):
        service.authenticate_user("alice", "wrong-pass")
    with pytest.raises(InvalidCredentialsError):
        service.authenticate_user("nobody", "secret123")


def test_login_storage_failure_is_a_500(client, alice, monkeypatch):
    def broken(self, username, password):
        raise OperationalError("SELECT users", {}, Exception("database is locked"))

    monkeypatch.setattr(UserService, "authenticate_user", broken)
    response = client.post("/api/users/login", json={"username": "alice", "password": "secret123"})
    assert response.status_code == 500
    assert response.json()["detail"] == "Login failed"


def test_login_missing_fields(client):
    response = client.post("/api/users/login", json={"username": "alice"})
    assert response.status_code == 400


def test_profile_includes_mood_summary(client, alice):
    for mood_type, score in (("happy", 5), ("sad", 2)):
        client.post("/api/moods", headers=alice["headers"], json={
            "user_id": alice["id"],
            "mood_type": mood_type,
            "emoji": "🙂",
            "mood_score": score,
        })

    response = client.get(f"/api/users/profile/{alice['id']}", headers=alice["headers"])
    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "alice"
    assert data["total_moods"] == 2
    assert data["avg_mood_score"] == 3.5
    assert data["created_at"].endswith("Z")


def test_profile_of_new_user_has_zero_average(client, alice):
    data = client.get(f"/api/users/profile/{alice['id']}", headers=alice["headers"]).json()
    assert data["total_moods"] == 0
    assert data["avg_mood_score"] == 0.0


def test_profile_requires_auth(client, alice):
    assert client.get(f"/api/users/profile/{alice['id']}").status_code == 401


def test_profile_of_another_user_is_forbidden(client, alice, bob):
    response = client.get(f"/api/users/profile/{bob['id']}", headers=alice["headers"])
    assert response.status_code == 403


def test_update_profile(client, alice):
    response = client.put(
        f"/api/users/profile/{alice['id']}",
        headers=alice["headers"],
        json={"username": "alice_w", "email": "alice.w@example.com"},
    )
    assert response.status_code == 200
    assert response.json()["username"] == "alice_w"

    login = client.post("/api/users/login", json={"username": "alice_w", "password": "secret123"})
    assert login.status_code == 200


def test_update_profile_missing_fields(client, alice):
    response = client.put(
        f"/api/users/profile/{alice['id']}",
        headers=alice["headers"],
        json={"username": "alice_w"},
    )
    assert response.status_code == 400


def test_update_profile_conflict(client, alice, bob):
    response = client.put(
        f"/api/users/profile/{alice['id']}",
        headers=alice["headers"],
        json={"username": "bob", "email": "alice@example.com"},
    )
    assert response.status_code == 400


def test_list_users(client, alice, bob):
    client.post("/api/moods", headers=bob["headers"], json={
        "user_id": bob["id"], "mood_type": "calm", "emoji": "😌", "mood_score": 3,
    })
    response = client.get("/api/users", headers=alice["headers"])
    assert response.status_code == 200
    counts = {user["username"]: user["total_moods"] for user in response.json()}
    assert counts == {"alice": 0, "bob": 1}


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["database"] == "ok"
    assert "X-Request-ID" in response.headers
