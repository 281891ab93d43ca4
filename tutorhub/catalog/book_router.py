from fastapi import APIRouter, Depends, HTTPException, Response
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.app_logger import get_logger
from tutorhub.catalog.catalog_models import BookCreate, BookUpdate
from tutorhub.database import (
    BOOKS, get_db, insert_document, list_documents, update_by_id, delete_by_id,
    serialize_mongo, serialize_many
)

router = APIRouter(prefix="/api/books", tags=["Books"])
logger = get_logger("books")


@router.post("", status_code=201)
async def create_book(data: BookCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        book = await insert_document(db, BOOKS, data.to_document())
        return {"message": "Book added successfully", "book": serialize_mongo(book)}
    except Exception:
        logger.exception("Error adding book")
        raise HTTPException(status_code=500, detail="Error adding book to database.")


@router.get("")
async def list_books(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return serialize_many(await list_documents(db, BOOKS))
    except Exception:
        logger.exception("Error fetching books")
        raise HTTPException(status_code=500, detail="Error fetching books from database.")


@router.put("/{book_id}")
async def update_book(book_id: str, data: BookUpdate, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        book = await update_by_id(db, BOOKS, book_id, data.changed_fields())
    except Exception:
        logger.exception("Error updating book %s", book_id)
        raise HTTPException(status_code=500, detail="Error updating book in database.")

    if not book:
        raise HTTPException(status_code=404, detail="Book not found.")
    return {"message": "Book updated successfully", "book": serialize_mongo(book)}


@router.delete("/{book_id}", status_code=204)
async def delete_book(book_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        deleted = await delete_by_id(db, BOOKS, book_id)
    except Exception:
        logger.exception("Error deleting book %s", book_id)
        raise HTTPException(status_code=500, detail="Error deleting book from database.")

    if not deleted:
        raise HTTPException(status_code=404, detail="Book not found.")
    return Response(status_code=204)
