from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.app_logger import get_logger
from tutorhub.database import (
    BOOK_ORDERS, get_db, list_documents, update_by_id, serialize_mongo, serialize_many
)
from tutorhub.orders import book_order_service as service
from tutorhub.orders.order_models import BookOrderCreate, OrderStatusUpdate

router = APIRouter(prefix="/api", tags=["Book Orders"])
logger = get_logger("book_orders")


@router.post("/book-orders", status_code=201)
async def create_book_order(data: BookOrderCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        order = await service.create_order(db, data)
        return {"message": "Book order placed successfully", "order": serialize_mongo(order)}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error placing book order")
        raise HTTPException(status_code=500, detail="Error saving book order to database.")


@router.get("/book-orders")
async def list_book_orders(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return serialize_many(await list_documents(db, BOOK_ORDERS, sort=[("timestamp", -1)]))
    except Exception:
        logger.exception("Error fetching book orders")
        raise HTTPException(status_code=500, detail="Error fetching book orders from database.")


@router.get("/students/{student_id}/book-orders")
async def list_student_book_orders(student_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return serialize_many(await service.list_student_orders(db, student_id))
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error fetching book orders for student %s", student_id)
        raise HTTPException(status_code=500, detail="Error fetching book orders from database.")


@router.put("/book-orders/{order_id}/status")
async def update_book_order_status(
    order_id: str,
    data: OrderStatusUpdate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    try:
        order = await update_by_id(db, BOOK_ORDERS, order_id, {"status": data.status})
    except Exception:
        logger.exception("Error updating book order %s", order_id)
        raise HTTPException(status_code=500, detail="Error updating book order in database.")

    if not order:
        raise HTTPException(status_code=404, detail="Book order not found.")
    return {"message": "Book order updated successfully", "order": serialize_mongo(order)}
