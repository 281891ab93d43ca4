from fastapi import APIRouter, Depends, HTTPException, Response
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.app_logger import get_logger
from tutorhub.catalog.catalog_models import SubscriptionCreate, SubscriptionUpdate
from tutorhub.database import (
    SUBSCRIPTIONS, get_db, insert_document, list_documents, update_by_id, delete_by_id,
    serialize_mongo, serialize_many
)

router = APIRouter(prefix="/api/subscriptions", tags=["Subscriptions"])
logger = get_logger("subscriptions")


@router.post("", status_code=201)
async def create_subscription(data: SubscriptionCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        subscription = await insert_document(db, SUBSCRIPTIONS, data.to_document())
        return {"message": "Subscription created successfully", "subscription": serialize_mongo(subscription)}
    except Exception:
        logger.exception("Error creating subscription")
        raise HTTPException(status_code=500, detail="Error creating subscription in database.")


@router.get("")
async def list_subscriptions(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return serialize_many(await list_documents(db, SUBSCRIPTIONS))
    except Exception:
        logger.exception("Error fetching subscriptions")
        raise HTTPException(status_code=500, detail="Error fetching subscriptions from database.")


@router.put("/{subscription_id}")
async def update_subscription(
    subscription_id: str,
    data: SubscriptionUpdate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        subscription = await update_by_id(db, SUBSCRIPTIONS, subscription_id, data.changed_fields())
    except Exception:
        logger.exception("Error updating subscription %s", subscription_id)
        raise HTTPException(status_code=500, detail="Error updating subscription in database.")

    if not subscription:
        raise HTTPException(status_code=404, detail="Subscription not found.")
    return {"message": "Subscription updated successfully", "subscription": serialize_mongo(subscription)}


@router.delete("/{subscription_id}", status_code=204)
async def delete_subscription(subscription_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        deleted = await delete_by_id(db, SUBSCRIPTIONS, subscription_id)
    except Exception:
        logger.exception("Error deleting subscription %s", subscription_id)
        raise HTTPException(status_code=500, detail="Error deleting subscription from database.")

    if not deleted:
        raise HTTPException(status_code=404, detail="Subscription not found.")
    return Response(status_code=204)
