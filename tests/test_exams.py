import pytest

from tests.conftest import run
from tutorhub.database import STUDENT_NOTIFICATIONS
from tutorhub.exams.exam_service import grade_answers

QUESTIONS = [{"correctAnswer": 1}, {"correctAnswer": 0}, {"correctAnswer": 1}, {"correctAnswer": 0}]


@pytest.mark.parametrize("answers, correct, score, passed", [
    ([1, 0, 1, 0], 4, 100, True),
    ([1, 0, 0, 1], 2, 50, True),
    ([1, 1, 0, 1], 1, 25, False),
    ([1, 0], 2, 50, True),
    ([1, 0, 1, 0, 3, 3], 4, 100, True),
    ([], 0, 0, False),
])
def test_grade_answers(answers, correct, score, passed):
    grade = grade_answers(QUESTIONS, answers, pass_score=50)

    assert grade.correct_answers == correct
    assert grade.total_questions == 4
    assert grade.score == score
    assert grade.passed is passed


def test_grade_answers_rounds_score():
    grade = grade_answers(QUESTIONS[:3], [1, 0, 0], pass_score=60)
    assert grade.score == 67
    assert grade.passed is True


def test_submit_exam_stores_result_and_notifies(client, db, student_id, lesson):
    response = client.post("/api/exam-results", json={
        "studentId": student_id, "lessonId": lesson["_id"], "answers": [1, 0, 0, 0],
    })

    assert response.status_code == 201
    result = response.json()["result"]
    assert result["correctAnswers"] == 3
    assert result["totalQuestions"] == 4
    assert result["score"] == 75
    assert result["passed"] is True
    assert result["lessonTitle"] == "Algebra I"

    notification = run(db[STUDENT_NOTIFICATIONS].find_one({"studentId": student_id}))
    assert notification["type"] == "exam"
    assert notification["relatedId"] == result["_id"]


def test_submit_exam_for_lesson_without_questions(client, student_id):
    lesson = client.post("/api/lessons", json={
        "title": "Intro", "price": 0, "description": "Welcome", "grade": "all",
    }).json()["lesson"]

    response = client.post("/api/exam-results", json={
        "studentId": student_id, "lessonId": lesson["_id"], "answers": [0],
    })

    assert response.status_code == 400


def test_submit_exam_unknown_student(client, lesson):
    response = client.post("/api/exam-results", json={
        "studentId": "1" * 24, "lessonId": lesson["_id"], "answers": [1],
    })
    assert response.status_code == 404


def test_list_exam_results(client, student_id, lesson):
    client.post("/api/exam-results", json={"studentId": student_id, "lessonId": lesson["_id"], "answers": [1]})

    assert len(client.get("/api/exam-results").json()) == 1
    results = client.get(f"/api/students/{student_id}/exam-results").json()
    assert results[0]["score"] == 25
    assert results[0]["passed"] is False
