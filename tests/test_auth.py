"""Registration, login, token guard and profile endpoints."""

from datetime import datetime, timedelta, timezone

import jwt

from conftest import register
from flatshare.config import settings
from flatshare.errors import ErrorCode, message_for


def test_register_returns_token_and_user(client):
    r = client.post("/auth/register", json={
        "email": "New.User@Example.com",
        "password": "secret123",
        "name": "New User",
    })
    assert r.status_code == 201
    data = r.json()
    assert data["access_token"]
    assert data["user"]["email"] == "new.user@example.com"
    assert data["user"]["name"] == "New User"
    assert "password" not in data["user"]
    assert "passwordHash" not in data["user"]


def test_register_duplicate_email_is_case_insensitive(client):
    register(client, "dup@example.com")
    r = client.post("/auth/register", json={
        "email": "DUP@example.com",
        "password": "secret123",
        "name": "Again",
    })
    assert r.status_code == 409
    body = r.json()
    assert body["statusCode"] == 409
    assert body["error"] == "Conflict"
    assert body["message"] == message_for(ErrorCode.AUTH_EMAIL_ALREADY_REGISTERED)
    assert body["path"] == "/auth/register"
    assert body["timestamp"].endswith("Z")
    assert "+00:00" not in body["timestamp"]


def test_register_validation_messages(client):
    r = client.post("/auth/register", json={"email": "not-an-email", "password": "123", "name": "A"})
    assert r.status_code == 400
    messages = r.json()["message"]
    assert message_for(ErrorCode.VALIDATION_EMAIL_INVALID) in messages
    assert message_for(ErrorCode.VALIDATION_PASSWORD_TOO_SHORT) in messages
    assert message_for(ErrorCode.VALIDATION_NAME_TOO_SHORT) in messages


def test_password_longer_than_72_bytes(client):
    register(client, "long.com", password="p" * 72)

    for password in ("a" * 80, "ñ" * 40):
        r = client.post("/auth/register", json={"email": "other@example.com", "password": password, "name": "Long"})
        assert r.status_code == 400
        assert message_for(ErrorCode.VALIDATION_PASSWORD_TOO_LONG) in r.json()["message"]

        r = client.post("/auth/login", json={"email": "long@example.com", "password": password})
        assert r.status_code == 400
        assert message_for(ErrorCode.VALIDATION_PASSWORD_TOO_LONG) in r.json()["message"]


def test_register_missing_field(client):
    r = client.post("/auth/register", json={"email": "a@example.com", "password": "secret123"})
    assert r.status_code == 400
    details = r.json()["details"]
    assert {"field": "name", "message": message_for(ErrorCode.VALIDATION_FIELD_REQUIRED)} in details


def test_login_success_with_any_email_case(client):
    user = register(client, "login@example.com")
    r = client.post("/auth/login", json={"email": "LOGIN@example.com", "password": "secret123"})
    assert r.status_code == 200
    data = r.json()
    assert data["user"]["id"] == user["id"]
    payload = jwt.decode(data["access_token"], settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    assert payload["sub"] == user["id"]
    assert payload["email"] == "login@example.com"


def test_login_failures_share_one_message(client):
    register(client, "login@example.com")
    wrong_password = client.post("/auth/login", json={"email": "login@example.com", "password": "wrong-pass"})
    unknown_user = client.post("/auth/login", json={"email": "nobody@example.com", "password": "secret123"})
    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.json()["message"] == unknown_user.json()["message"]
    assert wrong_password.json()["message"] == message_for(ErrorCode.AUTH_INVALID_CREDENTIALS)


def test_profile_requires_token(client):
    r = client.get("/auth/profile")
    assert r.status_code == 401
    assert r.json()["message"] == message_for(ErrorCode.AUTH_UNAUTHORIZED)


def test_profile_rejects_garbage_token(client):
    r = client.get("/auth/profile", headers={"Authorization": "Bearer not.a.token"})
    assert r.status_code == 401


def test_profile_rejects_expired_token(client):
    user = register(client, "late@example.com")
    token = jwt.encode(
        {
            "sub": user["id"],
            "email": user["email"],
            "type": "access",
            "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
        },
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    r = client.get("/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json()["message"] == message_for(ErrorCode.AUTH_SESSION_EXPIRED)


def test_get_profile_strips_password(client):
    user = register(client, "me@example.com", "Me Myself")
    r = client.get("/auth/profile", headers=user["headers"])
    assert r.status_code == 200
    data = r.json()
    assert data["id"] == user["id"]
    assert data["name"] == "Me Myself"
    assert "passwordHash" not in data
    assert "password_hash" not in data


def test_update_profile_only_touches_given_fields(client):
    user = register(client, "me@example.com", "Me Myself")
    r = client.put("/auth/profile", json={"bio": "Hola", "phone": "+34 600"}, headers=user["headers"])
    assert r.status_code == 200
    r = client.put("/auth/profile", json={"avatarUrl": "https://img/x.png"}, headers=user["headers"])
    assert r.status_code == 200
    data = r.json()
    assert data["name"] == "Me Myself"
    assert data["bio"] == "Hola"
    assert data["phone"] == "+34 600"
    assert data["avatarUrl"] == "https://img/x.png"


def test_update_profile_rejects_blank_name(client):
    user = register(client, "me@example.com", "Me Myself")
    r = client.put("/auth/profile", json={"name": "   "}, headers=user["headers"])
    assert r.status_code == 400
    assert message_for(ErrorCode.PROFILE_NAME_TOO_SHORT) in r.json()["message"]


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
