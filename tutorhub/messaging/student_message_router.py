from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.app_logger import get_logger
from tutorhub.database import STUDENT_MESSAGES, get_db, list_documents, serialize_mongo, serialize_many
from tutorhub.messaging import student_message_service as service
from tutorhub.messaging.messaging_models import ReplyCreate, StudentMessageCreate

router = APIRouter(prefix="/api", tags=["Student Messages"])
logger = get_logger("student_messages")


@router.post("/student-messages", status_code=201)
async def create_student_message(data: StudentMessageCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        message = await service.create_message(db, data)
        return {"message": "Message sent successfully", "studentMessage": serialize_mongo(message)}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error sending student message")
        raise HTTPException(status_code=500, detail="Error sending message to database.")


@router.get("/student-messages")
async def list_student_messages(db: AsyncIOMotorDatabase = Depends(get_db)):
    """Inbox for teachers and support, newest first"""
    try:
        messages = await list_documents(db, STUDENT_MESSAGES, sort=[("timestamp", -1)])
        return serialize_many(messages)
    except Exception:
        logger.exception("Error fetching student messages")
        raise HTTPException(status_code=500, detail="Error fetching messages from database.")


@router.get("/students/{student_id}/messages")
async def list_messages_for_student(student_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return serialize_many(await service.list_student_messages(db, student_id))
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error fetching messages for student %s", student_id)
        raise HTTPException(status_code=500, detail="Error fetching messages from database.")


@router.put("/student-messages/{message_id}/read")
async def mark_message_read(message_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        message = await service.mark_read(db, message_id)
        return {"message": "Message marked as read", "studentMessage": serialize_mongo(message)}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error marking message %s as read", message_id)
        raise HTTPException(status_code=500, detail="Error updating message in database.")


@router.post("/student-messages/{message_id}/replies", status_code=201)
async def reply_to_message(message_id: str, data: ReplyCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        message = await service.add_reply(db, message_id, data)
        return {"message": "Reply sent successfully", "studentMessage": serialize_mongo(message)}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error replying to message %s", message_id)
        raise HTTPException(status_code=500, detail="Error saving reply to database.")
