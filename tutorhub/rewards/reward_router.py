from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.app_logger import get_logger
from tutorhub.database import get_db, serialize_mongo, serialize_many
from tutorhub.rewards import reward_service as service
from tutorhub.rewards.reward_models import RewardGrant, RewardRedemption

router = APIRouter(prefix="/api/students/{student_id}", tags=["Rewards"])
logger = get_logger("rewards")


@router.post("/rewards", status_code=201)
async def grant_points(student_id: str, data: RewardGrant, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        result = await service.grant_points(db, student_id, data)
        return {
            "message": "Points added successfully",
            "points": result["points"],
            "entry": serialize_mongo(result["entry"]),
        }
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error adding points for student %s", student_id)
        raise HTTPException(status_code=500, detail="Error saving reward points.")


@router.get("/rewards")
async def list_reward_history(student_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return serialize_many(await service.list_history(db, student_id))
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error fetching reward history for student %s", student_id)
        raise HTTPException(status_code=500, detail="Error fetching reward history from database.")


@router.post("/redeem", status_code=201)
async def redeem_reward(student_id: str, data: RewardRedemption, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        result = await service.redeem_reward(db, student_id, data)
        return {
            "message": "Reward redeemed successfully",
            "points": result["points"],
            "redeemed": serialize_mongo(result["redeemed"]),
        }
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error redeeming reward for student %s", student_id)
        raise HTTPException(status_code=500, detail="Error redeeming reward.")


@router.get("/redeemed-rewards")
async def list_redeemed_rewards(student_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return serialize_many(await service.list_redeemed(db, student_id))
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error fetching redeemed rewards for student %s", student_id)
        raise HTTPException(status_code=500, detail="Error fetching redeemed rewards from database.")
