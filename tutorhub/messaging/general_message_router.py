from fastapi import APIRouter, Depends, HTTPException, Response
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.app_logger import get_logger
from tutorhub.database import (
    GENERAL_MESSAGES, get_db, insert_document, list_documents, delete_by_id,
    serialize_mongo, serialize_many
)
from tutorhub.messaging.messaging_models import GeneralMessageCreate

router = APIRouter(prefix="/api/general-messages", tags=["General Messages"])
logger = get_logger("general_messages")


@router.post("", status_code=201)
async def create_general_message(data: GeneralMessageCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        message = await insert_document(db, GENERAL_MESSAGES, data.to_document())
        return {"message": "General message sent successfully", "generalMessage": serialize_mongo(message)}
    except Exception:
        logger.exception("Error sending general message")
        raise HTTPException(status_code=500, detail="Error sending general message to database.")


@router.get("")
async def list_general_messages(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return serialize_many(await list_documents(db, GENERAL_MESSAGES))
    except Exception:
        logger.exception("Error fetching general messages")
        raise HTTPException(status_code=500, detail="Error fetching general messages from database.")


@router.delete("/{message_id}", status_code=204)
async def delete_general_message(message_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        deleted = await delete_by_id(db, GENERAL_MESSAGES, message_id)
    except Exception:
        logger.exception("Error deleting general message %s", message_id)
        raise HTTPException(status_code=500, detail="Error deleting general message from database.")

    if not deleted:
        raise HTTPException(status_code=404, detail="General message not found.")
    return Response(status_code=204)
