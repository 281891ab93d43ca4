from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.app_logger import get_logger
from tutorhub.database import TRANSFER_REQUESTS, get_db, list_documents, serialize_mongo, serialize_many
from tutorhub.payments import payment_service as service
from tutorhub.payments.payment_models import TransferDecision, TransferRequestCreate, TransferStatus

router = APIRouter(prefix="/api", tags=["Wallet Transfers"])
logger = get_logger("transfers")


@router.post("/transfer-requests", status_code=201)
async def create_transfer_request(data: TransferRequestCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        transfer = await service.create_transfer_request(db, data)
        return {"message": "Transfer request submitted successfully", "transferRequest": serialize_mongo(transfer)}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error creating transfer request")
        raise HTTPException(status_code=500, detail="Error saving transfer request to database.")


@router.get("/transfer-requests")
async def list_transfer_requests(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        transfers = await list_documents(db, TRANSFER_REQUESTS, sort=[("timestamp", -1)])
        return serialize_many(transfers)
    except Exception:
        logger.exception("Error fetching transfer requests")
        raise HTTPException(status_code=500, detail="Error fetching transfer requests from database.")


@router.get("/students/{student_id}/transfer-requests")
async def list_student_transfer_requests(student_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return serialize_many(await service.list_student_transfers(db, student_id))
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error fetching transfer requests for student %s", student_id)
        raise HTTPException(status_code=500, detail="Error fetching transfer requests from database.")


@router.put("/transfer-requests/{transfer_id}/confirm")
async def confirm_transfer_request(
    transfer_id: str,
    data: TransferDecision,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        transfer = await service.decide_transfer(db, transfer_id, data.support_id, TransferStatus.CONFIRMED)
        return {"message": "Transfer confirmed", "transferRequest": serialize_mongo(transfer)}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error confirming transfer request %s", transfer_id)
        raise HTTPException(status_code=500, detail="Error confirming transfer request.")


@router.put("/transfer-requests/{transfer_id}/reject")
async def reject_transfer_request(
    transfer_id: str,
    data: TransferDecision,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        transfer = await service.decide_transfer(db, transfer_id, data.support_id, TransferStatus.REJECTED)
        return {"message": "Transfer rejected", "transferRequest": serialize_mongo(transfer)}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error rejecting transfer request %s", transfer_id)
        raise HTTPException(status_code=500, detail="Error rejecting transfer request.")
