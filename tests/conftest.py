import os

os.environ.setdefault("SECRET_KEY", "test-secret")

from datetime import datetime, timedelta, timezone

import httpx
import pytest
from mongomock_motor import AsyncMongoMockClient

from portal.api.main import app
from portal.api.utils.auth_utils import create_token
from portal.db.database import get_db, init_indexes
from portal.services import quiz_catalog

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

ALGEBRA_QUESTIONS = [
    {"question": "2x = 4, x = ?", "options": ["1", "2", "3"], "answer": "2"},
    {"question": "x + 1 = 2, x = ?", "options": ["1", "2", "3"], "answer": "1"},
    {"question": "x - 1 = 2, x = ?", "options": ["1", "2", "3"], "answer": "3"},
]


@pytest.fixture
async def db():
    client = AsyncMongoMockClient(tz_aware=True)
    database = client["quiz_portal_test"]
    await init_indexes(database)
    return database


@pytest.fixture
def add_user(db):
    async def _add(email, username, role="student"):
        await db.users.insert_one({"email": email, "username": username, "role": role})
    return _add


@pytest.fixture
def make_quiz(db):
    async def _make(title="Algebra1", questions=None, open_time=None, close_time=None):
        return await quiz_catalog.create_quiz(
            db,
            title,
            questions if questions is not None else ALGEBRA_QUESTIONS,
            open_time or NOW - timedelta(hours=1),
            close_time or NOW + timedelta(hours=1),
        )
    return _make


@pytest.fixture
async def client(db):
    app.dependency_overrides[get_db] = lambda: db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


def auth_header(email):
    return {"Authorization": f"Bearer {create_token(email)}"}
