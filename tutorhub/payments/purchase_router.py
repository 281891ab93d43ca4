from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.app_logger import get_logger
from tutorhub.database import get_db, serialize_mongo, serialize_many
from tutorhub.payments import payment_service as service
from tutorhub.payments.payment_models import PurchaseCreate

router = APIRouter(prefix="/api", tags=["Purchases"])
logger = get_logger("purchases")


@router.post("/purchases", status_code=201)
async def create_purchase(data: PurchaseCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        purchase = await service.purchase_item(db, data)
        return {"message": "Purchase completed successfully", "purchase": serialize_mongo(purchase)}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error recording purchase")
        raise HTTPException(status_code=500, detail="Error recording purchase in database.")


@router.get("/students/{student_id}/purchases")
async def list_student_purchases(student_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return serialize_many(await service.list_student_purchases(db, student_id))
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error fetching purchases for student %s", student_id)
        raise HTTPException(status_code=500, detail="Error fetching purchases from database.")
