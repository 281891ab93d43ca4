from typing import List

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from tutorhub.database import (
    LESSONS, STUDENT_MESSAGES, find_by_id, insert_document, list_documents,
    new_id, parse_object_id, utcnow
)
from tutorhub.messaging.messaging_models import (
    MessageStatus, NotificationType, ReplyCreate, StudentMessageCreate
)
from tutorhub.messaging.notification_service import notify_student
from tutorhub.support.activity_log import log_support_activity
from tutorhub.users.student_service import get_staff_or_404, get_student_or_404
from tutorhub.users.user_models import StaffType

REPLY_NOTIFICATION_TYPES = {
    StaffType.TEACHER.value: NotificationType.TEACHER.value,
    StaffType.SUPPORT_STAFF.value: NotificationType.SUPPORT.value,
}


async def create_message(db: AsyncIOMotorDatabase, data: StudentMessageCreate) -> dict:
    """Question from a student, optionally about one lesson"""
    student = await get_student_or_404(db, data.student_id)
    if data.lesson_id and not await find_by_id(db, LESSONS, data.lesson_id):
        raise HTTPException(status_code=404, detail="Lesson not found.")

    doc = data.to_document()
    doc.update({
        "studentName": student["fullName"],
        "timestamp": utcnow(),
        "isRead": False,
        "status": MessageStatus.UNREAD.value,
        "replies": [],
    })
    return await insert_document(db, STUDENT_MESSAGES, doc)


async def list_student_messages(db: AsyncIOMotorDatabase, student_id: str) -> List[dict]:
    await get_student_or_404(db, student_id)
    return await list_documents(db, STUDENT_MESSAGES, {"studentId": student_id}, sort=[("timestamp", -1)])


async def mark_read(db: AsyncIOMotorDatabase, message_id: str) -> dict:
    oid = parse_object_id(message_id)
    message = None
    if oid is not None:
        # A replied message keeps its status
        message = await db[STUDENT_MESSAGES].find_one_and_update(
            {"_id": oid, "status": MessageStatus.UNREAD.value},
            {"$set": {"isRead": True, "status": MessageStatus.READ.value}},
            return_document=ReturnDocument.AFTER,
        )
        if message is None:
            message = await db[STUDENT_MESSAGES].find_one({"_id": oid})
    if not message:
        raise HTTPException(status_code=404, detail="Message not found.")
    return message


async def add_reply(db: AsyncIOMotorDatabase, message_id: str, data: ReplyCreate) -> dict:
    """
    Append a teacher or support reply and tell the student about it
    """
    if not (data.reply_text or data.reply_image_key or data.reply_audio_key):
        raise HTTPException(status_code=400, detail="Reply must contain text, an image or audio.")

    message = await find_by_id(db, STUDENT_MESSAGES, message_id)
    if not message:
        raise HTTPException(status_code=404, detail="Message not found.")

    responder = await get_staff_or_404(db, data.responder_type, data.responder_id)

    reply = {"_id": new_id(), **data.to_document(), "timestamp": utcnow()}
    message = await db[STUDENT_MESSAGES].find_one_and_update(
        {"_id": message["_id"]},
        {
            "$push": {"replies": reply},
            "$set": {"isRead": True, "status": MessageStatus.REPLIED.value},
        },
        return_document=ReturnDocument.AFTER,
    )

    await notify_student(
        db,
        message["studentId"],
        REPLY_NOTIFICATION_TYPES[data.responder_type],
        f"Reply: {message['subject']}",
        data.reply_text or "You received a reply to your message.",
        related_id=str(message["_id"]),
        can_reply=True,
    )

    if data.responder_type == StaffType.SUPPORT_STAFF.value:
        await log_support_activity(db, responder, "replied_to_chat", {
            "messageId": str(message["_id"]),
            "studentId": message["studentId"],
        })

    return message
