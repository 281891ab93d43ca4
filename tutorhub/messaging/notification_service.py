from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.database import STUDENT_NOTIFICATIONS, insert_document, utcnow


async def notify_student(
    db: AsyncIOMotorDatabase,
    student_id: str,
    notification_type: str,
    title: str,
    message: str,
    related_id: Optional[str] = None,
    can_reply: bool = False
) -> dict:
    return await insert_document(db, STUDENT_NOTIFICATIONS, {
        "studentId": student_id,
        "type": notification_type,
        "title": title,
        "message": message,
        "timestamp": utcnow(),
        "isRead": False,
        "canReply": can_reply,
        "relatedId": related_id,
    })
