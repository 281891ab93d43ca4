from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.app_logger import get_logger
from tutorhub.database import (
    STUDENT_NOTIFICATIONS, get_db, list_documents, update_by_id, serialize_mongo, serialize_many
)
from tutorhub.messaging.messaging_models import NotificationCreate
from tutorhub.messaging.notification_service import notify_student
from tutorhub.users.student_service import get_student_or_404

router = APIRouter(prefix="/api", tags=["Notifications"])
logger = get_logger("notifications")


@router.post("/notifications", status_code=201)
async def create_notification(data: NotificationCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        await get_student_or_404(db, data.student_id)
        notification = await notify_student(
            db,
            data.student_id,
            data.type,
            data.title,
            data.message,
            related_id=data.related_id,
            can_reply=data.can_reply,
        )
        return {"message": "Notification sent successfully", "notification": serialize_mongo(notification)}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error creating notification")
        raise HTTPException(status_code=500, detail="Error saving notification to database.")


@router.get("/students/{student_id}/notifications")
async def list_notifications(student_id: str, unread_only: bool = False, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        await get_student_or_404(db, student_id)
        query = {"studentId": student_id}
        if unread_only:
            query["isRead"] = False
        notifications = await list_documents(db, STUDENT_NOTIFICATIONS, query, sort=[("timestamp", -1)])
        return serialize_many(notifications)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error fetching notifications for student %s", student_id)
        raise HTTPException(status_code=500, detail="Error fetching notifications from database.")


@router.put("/notifications/{notification_id}/read")
async def mark_notification_read(notification_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        notification = await update_by_id(db, STUDENT_NOTIFICATIONS, notification_id, {"isRead": True})
    except Exception:
        logger.exception("Error marking notification %s as read", notification_id)
        raise HTTPException(status_code=500, detail="Error updating notification in database.")

    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found.")
    return {"message": "Notification marked as read", "notification": serialize_mongo(notification)}
