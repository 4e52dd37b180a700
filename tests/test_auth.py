"""Tests for registration, login and token handling."""
from datetime import datetime, timedelta, timezone

from jose import jwt

from skillpath.core.config import get_settings
from skillpath.core.security import create_access_token
from tests.conftest import register


class TestRegister:
    def test_register_student(self, client):
        headers, profile = register(client, "Maria@Example.com", form="Form 1", subject="Biology")
        assert profile["email"] == "maria@example.com"
        assert profile["role"] == "student"
        assert profile["skill_level"] == "beginner"
        assert profile["form"] == "Form 1"
        assert profile["subject"] == "Biology"
        assert profile["total_points"] == 0
        assert profile["streak_days"] == 0

    def test_register_teacher_drops_student_fields(self, client):
        _, profile = register(client, "t@example.com", role="teacher", form="Form 1", subject="Physics")
        assert profile["role"] == "teacher"
        assert profile["form"] is None
        assert profile["subject"] is None

    def test_duplicate_email(self, client):
        register(client, "dup@example.com")
        response = client.post(
            "/api/auth/register",
            json={"email": "DUP@example.com", "password": "secret-pass-1", "full_name": "Dup"},
        )
        assert response.status_code == 409

    def test_invalid_email(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "not-an-email", "password": "secret-pass-1", "full_name": "X"},
        )
        assert response.status_code == 400
        assert "email" in response.json()["detail"].lower()

    def test_short_password(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "x@example.com", "password": "short", "full_name": "X"},
        )
        assert response.status_code == 400

    def test_unknown_role_rejected(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "x@example.com", "password": "secret-pass-1", "full_name": "X", "role": "admin"},
        )
        assert response.status_code == 422


class TestLogin:
    def test_login_returns_token_and_starts_streak(self, client):
        register(client, "ana@example.com")
        response = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "secret-pass-1"})
        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["profile"]["streak_days"] == 1

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
        assert me.status_code == 200
        assert me.json()["email"] == "ana@example.com"

    def test_login_twice_same_day_keeps_streak(self, client):
        register(client, "ana@example.com")
        creds = {"email": "ana@example.com", "password": "secret-pass-1"}
        client.post("/api/auth/login", json=creds)
        response = client.post("/api/auth/login", json=creds)
        assert response.json()["profile"]["streak_days"] == 1

    def test_wrong_password(self, client):
        register(client, "ana@example.com")
        response = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "wrong-pass"})
        assert response.status_code == 401


class TestTokens:
    def test_missing_token(self, client):
        assert client.get("/api/auth/me").status_code == 401

    def test_garbage_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.token"})
        assert response.status_code == 401


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


class TestTokenClaims:
    def encode(self, **claims):
        settings = get_settings()
        return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)

    def test_expired_token(self, client):
        _, profile = register(client, "ana@example.com")
        token = self.encode(
            sub=str(profile["user_id"]),
            type="access",
            exp=datetime.now(timezone.utc) - timedelta(minutes=1),
        )
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_non_access_token(self, client):
        _, profile = register(client, "ana@example.com")
        token = self.encode(
            sub=str(profile["user_id"]),
            type="refresh",
            exp=datetime.now(timezone.utc) + timedelta(minutes=5),
        )
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_token_signed_with_other_key(self, client):
        _, profile = register(client, "ana@example.com")
        token = jwt.encode(
            {"sub": str(profile["user_id"]), "type": "access"}, "another-key", algorithm="HS256"
        )
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_valid_token_for_unknown_user(self, client):
        token = create_access_token(4242)
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
