from datetime import timedelta
from typing import List, Optional

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from tutorhub.app_logger import get_logger
from tutorhub.database import (
    PAYMENT_METHODS, PURCHASED_ITEMS, TRANSFER_REQUESTS, USERS,
    delete_by_id, find_by_id, insert_document, list_documents, parse_object_id, utcnow
)
from tutorhub.messaging.messaging_models import NotificationType
from tutorhub.messaging.notification_service import notify_student
from tutorhub.payments.payment_models import (
    ITEM_COLLECTIONS, ItemType, PaymentMethodCreate, PurchaseCreate,
    TransferRequestCreate, TransferStatus
)
from tutorhub.security import get_password_hash, verify_password
from tutorhub.support.activity_log import log_support_activity
from tutorhub.users.student_service import get_student_or_404, get_support_or_404

logger = get_logger("payments")

# Stored hash never leaves the service
PAYMENT_METHOD_PROJECTION = {"password": 0}

# ==================== PAYMENT METHODS ====================

async def create_payment_method(db: AsyncIOMotorDatabase, data: PaymentMethodCreate) -> dict:
    method = await insert_document(db, PAYMENT_METHODS, {
        "name": data.name,
        "number": data.number,
        "password": get_password_hash(data.password),
        "createdAt": utcnow(),
    })
    method.pop("password", None)
    return method


async def list_payment_methods(db: AsyncIOMotorDatabase) -> List[dict]:
    return await list_documents(db, PAYMENT_METHODS, projection=PAYMENT_METHOD_PROJECTION)


async def delete_payment_method(db: AsyncIOMotorDatabase, method_id: str, password: Optional[str]):
    """
    Deletion is gated by the method's control password.
    A wrong password leaves the document in place.
    """
    method = await find_by_id(db, PAYMENT_METHODS, method_id)
    if not method:
        raise HTTPException(status_code=404, detail="Payment method not found.")

    if not verify_password(password, method.get("password")):
        raise HTTPException(status_code=401, detail="Incorrect control password.")

    if not await delete_by_id(db, PAYMENT_METHODS, method_id):
        raise HTTPException(status_code=404, detail="Payment method not found.")

# ==================== TRANSFER REQUESTS ====================

async def create_transfer_request(db: AsyncIOMotorDatabase, data: TransferRequestCreate) -> dict:
    student = await get_student_or_404(db, data.student_id)
    if not await find_by_id(db, PAYMENT_METHODS, data.payment_method_id):
        raise HTTPException(status_code=404, detail="Payment method not found.")

    doc = data.to_document()
    doc.update({
        "studentName": student["fullName"],
        "status": TransferStatus.PENDING.value,
        "timestamp": utcnow(),
        "confirmedBy": None,
        "confirmationDate": None,
    })
    return await insert_document(db, TRANSFER_REQUESTS, doc)


async def list_student_transfers(db: AsyncIOMotorDatabase, student_id: str) -> List[dict]:
    await get_student_or_404(db, student_id)
    return await list_documents(db, TRANSFER_REQUESTS, {"studentId": student_id}, sort=[("timestamp", -1)])


async def decide_transfer(
    db: AsyncIOMotorDatabase,
    transfer_id: str,
    support_id: str,
    status: TransferStatus
) -> dict:
    """
    Confirm or reject a pending top-up.

    A confirmation credits the student's balance. Status change and credit
    are separate writes; only the pending -> decided transition is guarded,
    so a transfer is credited at most once.
    """
    support = await get_support_or_404(db, support_id)

    oid = parse_object_id(transfer_id)
    transfer = None
    if oid is not None:
        transfer = await db[TRANSFER_REQUESTS].find_one_and_update(
            {"_id": oid, "status": TransferStatus.PENDING.value},
            {"$set": {
                "status": status.value,
                "confirmedBy": str(support["_id"]),
                "confirmationDate": utcnow(),
            }},
            return_document=ReturnDocument.AFTER,
        )

    if not transfer:
        existing = await find_by_id(db, TRANSFER_REQUESTS, transfer_id)
        if not existing:
            raise HTTPException(status_code=404, detail="Transfer request not found.")
        raise HTTPException(status_code=409, detail=f"Transfer request is already {existing['status']}.")

    if status == TransferStatus.CONFIRMED:
        await db[USERS].update_one(
            {"_id": parse_object_id(transfer["studentId"])},
            {"$inc": {"balance": transfer["amount"]}},
        )
        title, message, action = (
            "Wallet top-up confirmed",
            f"{transfer['amount']} has been added to your balance.",
            "confirmed_payment",
        )
    else:
        title, message, action = (
            "Wallet top-up rejected",
            f"Your transfer {transfer['transactionNumber']} could not be verified.",
            "rejected_payment",
        )

    await notify_student(
        db, transfer["studentId"], NotificationType.PAYMENT.value, title, message,
        related_id=str(transfer["_id"]),
    )
    await log_support_activity(db, support, action, {
        "transferId": str(transfer["_id"]),
        "studentId": transfer["studentId"],
        "amount": transfer["amount"],
    })
    logger.info("Transfer %s %s by support %s", transfer["_id"], status.value, support["_id"])
    return transfer

# ==================== PURCHASES ====================

async def purchase_item(db: AsyncIOMotorDatabase, data: PurchaseCreate) -> dict:
    """
    Buy a lesson or subscription from the student's wallet.

    The item is looked up in the collection named by itemType. The debit only
    applies while the balance covers the price. Debit and purchase record are
    two writes without a transaction.
    """
    student = await get_student_or_404(db, data.student_id)
    if student.get("isBanned"):
        raise HTTPException(status_code=403, detail="Student is banned.")

    item = await find_by_id(db, ITEM_COLLECTIONS[data.item_type], data.item_id)
    if not item:
        raise HTTPException(status_code=404, detail=f"{data.item_type} not found.")
    if not item.get("isActive", True):
        raise HTTPException(status_code=400, detail=f"{data.item_type} is not available.")

    price = item["price"]
    debit = await db[USERS].update_one(
        {"_id": student["_id"], "balance": {"$gte": price}},
        {"$inc": {"balance": -price}},
    )
    if debit.matched_count == 0:
        raise HTTPException(status_code=400, detail="Insufficient balance.")

    now = utcnow()
    expiry = None
    if data.item_type == ItemType.SUBSCRIPTION.value:
        expiry = now + timedelta(days=item.get("duration", 0))

    return await insert_document(db, PURCHASED_ITEMS, {
        "studentId": data.student_id,
        "itemId": data.item_id,
        "itemType": data.item_type,
        "price": price,
        "purchaseDate": now,
        "expiryDate": expiry,
    })


async def list_student_purchases(db: AsyncIOMotorDatabase, student_id: str) -> List[dict]:
    await get_student_or_404(db, student_id)
    return await list_documents(db, PURCHASED_ITEMS, {"studentId": student_id}, sort=[("purchaseDate", -1)])
