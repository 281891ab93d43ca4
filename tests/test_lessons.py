import pytest

from tests.conftest import run
from tutorhub.database import LESSONS

LESSON = {"title": "Geometry", "price": 50, "description": "Angles", "grade": "second"}


def test_create_lesson_returns_saved_document(client):
    response = client.post("/api/lessons", json=LESSON)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Lesson saved successfully"
    lesson = body["lesson"]
    assert lesson["_id"]
    assert lesson["title"] == "Geometry"
    assert lesson["isActive"] is True
    assert lesson["examQuestions"] == []
    assert lesson["createdAt"]


def test_lesson_then_list(client):
    created = client.post("/api/lessons", json=LESSON).json()["lesson"]

    response = client.get("/api/lessons")

    assert response.status_code == 200
    lessons = response.json()
    assert len(lessons) == 1
    assert lessons[0]["_id"] == created["_id"]
    assert lessons[0]["price"] == 50


def test_repeated_creates_get_distinct_ids(client):
    ids = {client.post("/api/lessons", json=LESSON).json()["lesson"]["_id"] for _ in range(3)}
    assert len(ids) == 3
    assert len(client.get("/api/lessons").json()) == 3


def test_exam_questions_get_ids(lesson):
    question_ids = [q["_id"] for q in lesson["examQuestions"]]
    assert len(question_ids) == 4
    assert len(set(question_ids)) == 4
    assert lesson["examQuestions"][0]["correctAnswer"] == 1


@pytest.mark.parametrize("missing", ["title", "price", "description", "grade"])
def test_create_lesson_missing_field(client, db, missing):
    payload = {k: v for k, v in LESSON.items() if k != missing}

    response = client.post("/api/lessons", json=payload)

    assert response.status_code == 400
    assert run(db[LESSONS].count_documents({})) == 0


def test_create_lesson_unknown_grade(client):
    response = client.post("/api/lessons", json={**LESSON, "grade": "fourth"})
    assert response.status_code == 400


def test_update_lesson_changes_only_sent_fields(client):
    created = client.post("/api/lessons", json=LESSON).json()["lesson"]

    response = client.put(f"/api/lessons/{created['_id']}", json={"price": 75, "isActive": False})

    assert response.status_code == 200
    lesson = response.json()["lesson"]
    assert lesson["price"] == 75
    assert lesson["isActive"] is False
    assert lesson["title"] == "Geometry"


def test_update_missing_lesson(client):
    created = client.post("/api/lessons", json=LESSON).json()["lesson"]

    response = client.put("/api/lessons/" + "a" * 24, json={"price": 1})

    assert response.status_code == 404
    lessons = client.get("/api/lessons").json()
    assert [item["_id"] for item in lessons] == [created["_id"]]
    assert lessons[0]["price"] == 50


def test_update_malformed_id(client):
    response = client.put("/api/lessons/not-an-id", json={"price": 1})
    assert response.status_code == 404


def test_delete_lesson(client):
    created = client.post("/api/lessons", json=LESSON).json()["lesson"]

    response = client.delete(f"/api/lessons/{created['_id']}")

    assert response.status_code == 204
    assert client.get("/api/lessons").json() == []
    assert client.delete(f"/api/lessons/{created['_id']}").status_code == 404
    assert client.put(f"/api/lessons/{created['_id']}", json={"price": 1}).status_code == 404
    assert client.get("/api/lessons").json() == []


def test_update_lesson_rejects_null_for_required_fields(client, db):
    created = client.post("/api/lessons", json=LESSON).json()["lesson"]

    response = client.put(f"/api/lessons/{created['_id']}", json={"title": None, "price": None})

    assert response.status_code == 400
    stored = run(db[LESSONS].find_one({}))
    assert stored["title"] == "Geometry"
    assert stored["price"] == 50


def test_update_lesson_can_clear_media(client):
    created = client.post("/api/lessons", json={**LESSON, "coverImage": "covers/geo.png"}).json()["lesson"]

    response = client.put(f"/api/lessons/{created['_id']}", json={"coverImage": None})

    assert response.status_code == 200
    assert response.json()["lesson"]["coverImage"] is None
