from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.app_logger import get_logger
from tutorhub.database import EXAM_RESULTS, get_db, list_documents, serialize_mongo, serialize_many
from tutorhub.exams import exam_service as service
from tutorhub.exams.exam_models import ExamSubmission

router = APIRouter(prefix="/api", tags=["Exams"])
logger = get_logger("exams")


@router.post("/exam-results", status_code=201)
async def submit_exam(data: ExamSubmission, db: AsyncIOMotorDatabase = Depends(get_db)):
    """Grade a lesson exam and store the result"""
    try:
        result = await service.submit_exam(db, data)
        return {"message": "Exam submitted successfully", "result": serialize_mongo(result)}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error saving exam result")
        raise HTTPException(status_code=500, detail="Error saving exam result to database.")


@router.get("/exam-results")
async def list_exam_results(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return serialize_many(await list_documents(db, EXAM_RESULTS, sort=[("timestamp", -1)]))
    except Exception:
        logger.exception("Error fetching exam results")
        raise HTTPException(status_code=500, detail="Error fetching exam results from database.")


@router.get("/students/{student_id}/exam-results")
async def list_student_exam_results(student_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return serialize_many(await service.list_student_results(db, student_id))
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error fetching exam results for student %s", student_id)
        raise HTTPException(status_code=500, detail="Error fetching exam results from database.")
