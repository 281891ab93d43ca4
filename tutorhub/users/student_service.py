from typing import List

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from tutorhub.database import USERS, find_by_id, list_documents, utcnow
from tutorhub.support.activity_log import log_support_activity
from tutorhub.users.user_models import BanRequest, StaffType, STAFF_USER_TYPES, UserType

PUBLIC_PROJECTION = {"password": 0}

# ==================== LOOKUPS ====================

async def get_student_or_404(db: AsyncIOMotorDatabase, student_id: str, projection: dict = None) -> dict:
    student = await find_by_id(db, USERS, student_id, {"type": UserType.STUDENT.value}, projection)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found.")
    return student


async def get_staff_or_404(db: AsyncIOMotorDatabase, staff_type: str, staff_id: str) -> dict:
    """
    Resolve a (staff type, id) reference against the users collection.
    The referenced user must carry the matching discriminator.
    """
    user_type = STAFF_USER_TYPES.get(staff_type)
    staff = None
    if user_type:
        staff = await find_by_id(db, USERS, staff_id, {"type": user_type})
    if not staff:
        raise HTTPException(status_code=404, detail=f"{staff_type} not found.")
    return staff


async def get_support_or_404(db: AsyncIOMotorDatabase, support_id: str) -> dict:
    return await get_staff_or_404(db, StaffType.SUPPORT_STAFF.value, support_id)


async def list_students(db: AsyncIOMotorDatabase) -> List[dict]:
    return await list_documents(db, USERS, {"type": UserType.STUDENT.value}, PUBLIC_PROJECTION)

# ==================== BANS ====================

async def ban_student(db: AsyncIOMotorDatabase, student_id: str, data: BanRequest) -> dict:
    student = await get_student_or_404(db, student_id)
    staff = await get_staff_or_404(db, data.banned_by_type, data.banned_by)

    student = await db[USERS].find_one_and_update(
        {"_id": student["_id"]},
        {"$set": {
            "isBanned": True,
            "banReason": data.reason,
            "bannedAt": utcnow(),
            "bannedBy": data.banned_by,
            "bannedByType": data.banned_by_type,
        }},
        projection=PUBLIC_PROJECTION,
        return_document=ReturnDocument.AFTER,
    )

    if data.banned_by_type == StaffType.SUPPORT_STAFF.value:
        await log_support_activity(db, staff, "banned_student", {
            "studentId": student_id,
            "reason": data.reason,
        })

    return student


async def unban_student(db: AsyncIOMotorDatabase, student_id: str) -> dict:
    student = await get_student_or_404(db, student_id)
    student = await db[USERS].find_one_and_update(
        {"_id": student["_id"]},
        {"$set": {
            "isBanned": False,
            "banReason": None,
            "bannedAt": None,
            "bannedBy": None,
            "bannedByType": None,
        }},
        projection=PUBLIC_PROJECTION,
        return_document=ReturnDocument.AFTER,
    )
    return student
