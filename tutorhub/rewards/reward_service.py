from typing import List

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from tutorhub.database import REDEEMED_REWARDS, REWARD_HISTORY, USERS, insert_document, list_documents, utcnow
from tutorhub.rewards.reward_models import RewardGrant, RewardRedemption
from tutorhub.users.student_service import get_student_or_404

# ==================== POINTS LEDGER ====================

async def grant_points(db: AsyncIOMotorDatabase, student_id: str, data: RewardGrant) -> dict:
    student = await get_student_or_404(db, student_id)

    student = await db[USERS].find_one_and_update(
        {"_id": student["_id"]},
        {"$inc": {"points": data.points}},
        projection={"points": 1},
        return_document=ReturnDocument.AFTER,
    )
    entry = await insert_document(db, REWARD_HISTORY, {
        "studentId": student_id,
        "points": data.points,
        "reason": data.reason,
        "timestamp": utcnow(),
    })
    return {"points": student["points"], "entry": entry}


async def redeem_reward(db: AsyncIOMotorDatabase, student_id: str, data: RewardRedemption) -> dict:
    """
    Spend points on a reward. Points are only taken while the balance covers the cost.
    """
    student = await get_student_or_404(db, student_id)

    student = await db[USERS].find_one_and_update(
        {"_id": student["_id"], "points": {"$gte": data.cost}},
        {"$inc": {"points": -data.cost}},
        projection={"points": 1},
        return_document=ReturnDocument.AFTER,
    )
    if not student:
        raise HTTPException(status_code=400, detail="Not enough points.")

    redeemed = await insert_document(db, REDEEMED_REWARDS, {
        "studentId": student_id,
        "rewardId": data.reward_id,
        "rewardName": data.reward_name,
        "cost": data.cost,
        "timestamp": utcnow(),
    })
    return {"points": student["points"], "redeemed": redeemed}


async def list_history(db: AsyncIOMotorDatabase, student_id: str) -> List[dict]:
    await get_student_or_404(db, student_id)
    return await list_documents(db, REWARD_HISTORY, {"studentId": student_id}, sort=[("timestamp", -1)])


async def list_redeemed(db: AsyncIOMotorDatabase, student_id: str) -> List[dict]:
    await get_student_or_404(db, student_id)
    return await list_documents(db, REDEEMED_REWARDS, {"studentId": student_id}, sort=[("timestamp", -1)])
