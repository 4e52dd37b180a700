"""Shared fixtures: a fresh SQLite database per test and an authenticated client."""
import asyncio
import os
import tempfile
from pathlib import Path

_DB_DIR = Path(tempfile.mkdtemp(prefix="skillpath-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR / 'test.db'}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SEED_ON_STARTUP"] = "true"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import update  # noqa: E402

from skillpath.db.base import Base  # noqa: E402
from skillpath.db.session import AsyncSessionLocal, engine  # noqa: E402
from skillpath.main import create_app  # noqa: E402
from skillpath.models import Profile  # noqa: E402


async def _reset_schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def _set_points(user_id: int, points: int) -> None:
    async with AsyncSessionLocal() as db:
        await db.execute(update(Profile).where(Profile.user_id == user_id).values(total_points=points))
        await db.commit()


@pytest.fixture
def app():
    asyncio.run(_reset_schema())
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def register(client, email="ana@example.com", role="student", **extra):
    """Register a user; returns (headers, profile dict)."""
    body = {
        "email": email,
        "password": "secret-pass-1",
        "full_name": extra.pop("full_name", email.split("@")[0].title()),
        "role": role,
        **extra,
    }
    response = client.post("/api/auth/register", json=body)
    assert response.status_code == 201, response.text
    data = response.json()
    return {"Authorization": f"Bearer {data['access_token']}"}, data["profile"]


def set_points(user_id: int, points: int) -> None:
    asyncio.run(_set_points(user_id, points))


def find_module(client, headers, title):
    modules = client.get("/api/modules", headers=headers).json()
    return next(m for m in modules if m["title"] == title)


def module_quiz(client, headers, module_id):
    quizzes = client.get(f"/api/modules/{module_id}/quizzes", headers=headers).json()
    return quizzes[0]


@pytest.fixture
def student(client):
    return register(client, "student@example.com", subject="Mathematics", form="Form 2")


@pytest.fixture
def teacher(client):
    return register(client, "teacher@example.com", role="teacher")
