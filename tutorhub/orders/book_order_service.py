from typing import List

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.catalog.catalog_models import Availability
from tutorhub.database import BOOKS, BOOK_ORDERS, find_by_id, insert_document, list_documents, utcnow
from tutorhub.orders.order_models import BookOrderCreate, OrderStatus
from tutorhub.users.student_service import get_student_or_404


async def create_order(db: AsyncIOMotorDatabase, data: BookOrderCreate) -> dict:
    """Order a printed book; names and price are copied from the student and book"""
    student = await get_student_or_404(db, data.student_id)

    book = await find_by_id(db, BOOKS, data.book_id)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found.")
    if book.get("availability") == Availability.UNAVAILABLE.value:
        raise HTTPException(status_code=409, detail="Book is unavailable.")

    doc = data.to_document()
    doc.update({
        "studentName": student["fullName"],
        "bookName": book["name"],
        "price": book["price"],
        "status": OrderStatus.PENDING.value,
        "timestamp": utcnow(),
    })
    return await insert_document(db, BOOK_ORDERS, doc)


async def list_student_orders(db: AsyncIOMotorDatabase, student_id: str) -> List[dict]:
    await get_student_or_404(db, student_id)
    return await list_documents(db, BOOK_ORDERS, {"studentId": student_id}, sort=[("timestamp", -1)])
