from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.app_logger import get_logger
from tutorhub.database import get_db, serialize_mongo, serialize_many
from tutorhub.users import student_service as service
from tutorhub.users.user_models import BanRequest

router = APIRouter(prefix="/api/students", tags=["Students"])
logger = get_logger("students")


@router.get("")
async def list_students(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return serialize_many(await service.list_students(db))
    except Exception:
        logger.exception("Error fetching students")
        raise HTTPException(status_code=500, detail="Error fetching students from database.")


@router.get("/{student_id}")
async def get_student(student_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        student = await service.get_student_or_404(db, student_id, service.PUBLIC_PROJECTION)
        return serialize_mongo(student)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error fetching student %s", student_id)
        raise HTTPException(status_code=500, detail="Error fetching student from database.")


@router.post("/{student_id}/ban")
async def ban_student(student_id: str, data: BanRequest, db: AsyncIOMotorDatabase = Depends(get_db)):
    """
    Ban a student. The banning user is given as a (bannedByType, bannedBy) pair
    and must exist with the matching role.
    """
    try:
        student = await service.ban_student(db, student_id, data)
        return {"message": "Student banned successfully", "student": serialize_mongo(student)}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error banning student %s", student_id)
        raise HTTPException(status_code=500, detail="Error banning student.")


@router.post("/{student_id}/unban")
async def unban_student(student_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        student = await service.unban_student(db, student_id)
        return {"message": "Student unbanned successfully", "student": serialize_mongo(student)}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error unbanning student %s", student_id)
        raise HTTPException(status_code=500, detail="Error unbanning student.")
