from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.database import SUPPORT_ACTIVITY_LOGS, utcnow


async def log_support_activity(
    db: AsyncIOMotorDatabase,
    support: dict,
    action: str,
    details: Optional[dict] = None
):
    """
    Record an action taken by a support user

    Args:
        support: the support user's document from the users collection
        action: short label, e.g. 'confirmed_payment', 'banned_student', 'replied_to_chat'
        details: free-form context stored as-is
    """
    await db[SUPPORT_ACTIVITY_LOGS].insert_one({
        "supportId": str(support["_id"]),
        "supportName": support.get("fullName"),
        "action": action,
        "details": details or {},
        "timestamp": utcnow(),
    })
