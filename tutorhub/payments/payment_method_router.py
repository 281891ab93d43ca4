from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.app_logger import get_logger
from tutorhub.database import get_db, serialize_mongo, serialize_many
from tutorhub.payments import payment_service as service
from tutorhub.payments.payment_models import PaymentMethodCreate, PaymentMethodDelete

router = APIRouter(prefix="/api/payment-methods", tags=["Payment Methods"])
logger = get_logger("payment_methods")


@router.post("", status_code=201)
async def create_payment_method(data: PaymentMethodCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        method = await service.create_payment_method(db, data)
        return {"message": "Payment method added successfully", "method": serialize_mongo(method)}
    except Exception:
        logger.exception("Error adding payment method")
        raise HTTPException(status_code=500, detail="Error adding payment method to database.")


@router.get("")
async def list_payment_methods(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return serialize_many(await service.list_payment_methods(db))
    except Exception:
        logger.exception("Error fetching payment methods")
        raise HTTPException(status_code=500, detail="Error fetching payment methods from database.")


@router.delete("/{method_id}", status_code=204)
async def delete_payment_method(
    method_id: str,
    data: Optional[PaymentMethodDelete] = None,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Delete a payment method; the body carries its control password.
    An unknown id is a 404 even without a body.
    """
    try:
        await service.delete_payment_method(db, method_id, data.password if data else None)
        return Response(status_code=204)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error deleting payment method %s", method_id)
        raise HTTPException(status_code=500, detail="Error deleting payment method from database.")
