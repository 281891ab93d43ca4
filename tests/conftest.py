# tests/conftest.py
"""
Shared fixtures.

The app runs against an in-memory Motor-compatible database (mongomock-motor)
injected through FastAPI's dependency overrides. TestClient is not used as a
context manager, so the startup hook (real MongoDB connection) never runs.
"""

import asyncio
import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from tutorhub.database import USERS, get_db
from tutorhub.main import app
from tutorhub.security import get_password_hash
from tutorhub.users.user_models import SupportStaffDocument

TEACHER = {"name": "Mahmoud only", "code": "HHDV/58HR", "phone": "01050747978"}


def run(coro):
    """Drive one async database call from a synchronous test"""
    return asyncio.run(coro)


@pytest.fixture
def db():
    return AsyncMongoMockClient()["tutorhub_test"]


@pytest.fixture
def client(db):
    async def override_get_db():
        return db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register_student(client):
    """Factory: register a student through the API and return its id"""
    counter = {"n": 0}

    def _register(**overrides):
        counter["n"] += 1
        payload = {
            "fullName": f"Student {counter['n']}",
            "studentNumber": f"0100000{counter['n']:04d}",
            "parentNumber": "01200000000",
            "password": "secret-pass",
            "gradeLevel": "first",
        }
        payload.update(overrides)
        response = client.post("/api/auth/register", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["studentId"]

    return _register


@pytest.fixture
def student_id(register_student):
    return register_student()


@pytest.fixture
def teacher_id(client):
    response = client.post("/api/auth/teacher-login", json=TEACHER)
    assert response.status_code == 200, response.text
    return response.json()["user"]["id"]


@pytest.fixture
def support_user(db):
    """Support accounts are provisioned directly in the store"""
    doc = SupportStaffDocument(
        full_name="Sara Support",
        support_code="SUP-001",
        password=get_password_hash("support-pass"),
    ).to_document()
    result = run(db[USERS].insert_one(doc))
    return {"id": str(result.inserted_id), "name": doc["fullName"], "code": doc["supportCode"]}


@pytest.fixture
def lesson(client):
    response = client.post("/api/lessons", json={
        "title": "Algebra I",
        "price": 100,
        "description": "Intro",
        "grade": "first",
        "examQuestions": [
            {"question": "1 + 1", "choices": ["1", "2", "3"], "correctAnswer": 1},
            {"question": "2 * 3", "choices": ["6", "5"], "correctAnswer": 0},
            {"question": "9 - 4", "choices": ["4", "5"], "correctAnswer": 1},
            {"question": "10 / 2", "choices": ["5", "2"], "correctAnswer": 0},
        ],
    })
    assert response.status_code == 201, response.text
    return response.json()["lesson"]
