from typing import List

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub import config
from tutorhub.database import EXAM_RESULTS, LESSONS, find_by_id, insert_document, list_documents, utcnow
from tutorhub.exams.exam_models import ExamGrade, ExamSubmission
from tutorhub.messaging.messaging_models import NotificationType
from tutorhub.messaging.notification_service import notify_student
from tutorhub.users.student_service import get_student_or_404


def grade_answers(questions: List[dict], answers: List[int], pass_score: int = None) -> ExamGrade:
    """
    Compare submitted choice indices with each question's correctAnswer.
    Missing answers count as wrong; extra answers are ignored.
    """
    if pass_score is None:
        pass_score = config.EXAM_PASS_SCORE

    total = len(questions)
    correct = sum(
        1 for question, answer in zip(questions, answers)
        if answer == question.get("correctAnswer")
    )
    score = round(correct * 100 / total) if total else 0
    return ExamGrade(
        correct_answers=correct,
        total_questions=total,
        score=score,
        passed=score >= pass_score,
    )


async def submit_exam(db: AsyncIOMotorDatabase, data: ExamSubmission) -> dict:
    student = await get_student_or_404(db, data.student_id)

    lesson = await find_by_id(db, LESSONS, data.lesson_id)
    if not lesson:
        raise HTTPException(status_code=404, detail="Lesson not found.")

    questions = lesson.get("examQuestions") or []
    if not questions:
        raise HTTPException(status_code=400, detail="Lesson has no exam.")

    grade = grade_answers(questions, data.answers)

    result = await insert_document(db, EXAM_RESULTS, {
        "studentId": data.student_id,
        "studentName": student["fullName"],
        "lessonId": data.lesson_id,
        "lessonTitle": lesson["title"],
        **grade.to_document(),
        "answers": data.answers,
        "timestamp": utcnow(),
    })

    await notify_student(
        db,
        data.student_id,
        NotificationType.EXAM.value,
        f"Exam result: {lesson['title']}",
        f"You scored {grade.score}% ({grade.correct_answers}/{grade.total_questions}).",
        related_id=str(result["_id"]),
    )
    return result


async def list_student_results(db: AsyncIOMotorDatabase, student_id: str) -> List[dict]:
    await get_student_or_404(db, student_id)
    return await list_documents(db, EXAM_RESULTS, {"studentId": student_id}, sort=[("timestamp", -1)])
