from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.app_logger import get_logger
from tutorhub.database import SUPPORT_ACTIVITY_LOGS, get_db, list_documents, serialize_many

router = APIRouter(prefix="/api/support-activity", tags=["Support"])
logger = get_logger("support")


@router.get("")
async def list_support_activity(db: AsyncIOMotorDatabase = Depends(get_db)):
    """All support actions, newest first"""
    try:
        logs = await list_documents(db, SUPPORT_ACTIVITY_LOGS, sort=[("timestamp", -1)])
        return serialize_many(logs)
    except Exception:
        logger.exception("Error fetching support activity")
        raise HTTPException(status_code=500, detail="Error fetching support activity from database.")
