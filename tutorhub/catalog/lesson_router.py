from fastapi import APIRouter, Depends, HTTPException, Response
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.app_logger import get_logger
from tutorhub.catalog.catalog_models import (
    LessonCreate, LessonUpdate, lesson_document, lesson_updates
)
from tutorhub.database import (
    LESSONS, get_db, insert_document, list_documents, update_by_id, delete_by_id,
    serialize_mongo, serialize_many
)

router = APIRouter(prefix="/api/lessons", tags=["Lessons"])
logger = get_logger("lessons")


@router.post("", status_code=201)
async def create_lesson(data: LessonCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        lesson = await insert_document(db, LESSONS, lesson_document(data))
        return {"message": "Lesson saved successfully", "lesson": serialize_mongo(lesson)}
    except Exception:
        logger.exception("Error saving lesson")
        raise HTTPException(status_code=500, detail="Error saving lesson to database.")


@router.get("")
async def list_lessons(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return serialize_many(await list_documents(db, LESSONS))
    except Exception:
        logger.exception("Error fetching lessons")
        raise HTTPException(status_code=500, detail="Error fetching lessons from database.")


@router.put("/{lesson_id}")
async def update_lesson(lesson_id: str, data: LessonUpdate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        lesson = await update_by_id(db, LESSONS, lesson_id, lesson_updates(data))
    except Exception:
        logger.exception("Error updating lesson %s", lesson_id)
        raise HTTPException(status_code=500, detail="Error updating lesson in database.")

    if not lesson:
        raise HTTPException(status_code=404, detail="Lesson not found.")
    return {"message": "Lesson updated successfully", "lesson": serialize_mongo(lesson)}


@router.delete("/{lesson_id}", status_code=204)
async def delete_lesson(lesson_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        deleted = await delete_by_id(db, LESSONS, lesson_id)
    except Exception:
        logger.exception("Error deleting lesson %s", lesson_id)
        raise HTTPException(status_code=500, detail="Error deleting lesson from database.")

    if not deleted:
        raise HTTPException(status_code=404, detail="Lesson not found.")
    return Response(status_code=204)
