from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ReturnDocument

from tutorhub import config
from tutorhub.app_logger import get_logger

logger = get_logger("database")

# ==================== COLLECTIONS ====================

USERS = "users"
LESSONS = "lessons"
SUBSCRIPTIONS = "subscriptions"
PURCHASED_ITEMS = "purchased_items"
TRANSFER_REQUESTS = "transfer_requests"
PAYMENT_METHODS = "payment_methods"
GENERAL_MESSAGES = "general_messages"
BOOKS = "books"
BOOK_ORDERS = "book_orders"
EXAM_RESULTS = "exam_results"
STUDENT_MESSAGES = "student_messages"
STUDENT_NOTIFICATIONS = "student_notifications"
REWARD_HISTORY = "reward_history"
REDEEMED_REWARDS = "redeemed_rewards"
SUPPORT_ACTIVITY_LOGS = "support_activity_logs"


class DatabaseNotConfigured(RuntimeError):
    """Raised when MONGODB_URI is missing"""


_client: Optional[AsyncIOMotorClient] = None
_db: Optional[AsyncIOMotorDatabase] = None

# ==================== CONNECTION ====================

async def connect(uri: Optional[str] = None) -> AsyncIOMotorDatabase:
    """
    Open the shared Motor client and verify the server answers a ping.
    Any failure here is fatal for the process.
    """
    global _client, _db

    uri = uri or config.MONGODB_URI
    if not uri:
        raise DatabaseNotConfigured("MONGODB_URI is not defined in environment variables.")

    client = AsyncIOMotorClient(uri, tz_aware=True)
    await client.admin.command("ping")

    _client = client
    _db = client.get_default_database(default=config.DATABASE_NAME)
    logger.info("MongoDB connected successfully (database=%s)", _db.name)
    return _db


def close():
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None


async def get_db() -> AsyncIOMotorDatabase:
    """Database dependency"""
    if _db is None:
        raise RuntimeError("Database is not initialized")
    return _db


async def create_indexes(db: AsyncIOMotorDatabase):
    """Unique and lookup indexes, called on startup"""
    users = db[USERS]
    await users.create_index("studentNumber", unique=True, sparse=True)
    await users.create_index("teacherCode", unique=True, sparse=True)
    await users.create_index("phoneNumber", unique=True, sparse=True)
    await users.create_index("supportCode", unique=True, sparse=True)
    await users.create_index("type")

    await db[PURCHASED_ITEMS].create_index("studentId")
    await db[TRANSFER_REQUESTS].create_index([("studentId", 1), ("status", 1)])
    await db[BOOK_ORDERS].create_index("studentId")
    await db[EXAM_RESULTS].create_index([("studentId", 1), ("lessonId", 1)])
    await db[STUDENT_MESSAGES].create_index("studentId")
    await db[STUDENT_NOTIFICATIONS].create_index([("studentId", 1), ("isRead", 1)])
    await db[REWARD_HISTORY].create_index("studentId")
    await db[REDEEMED_REWARDS].create_index("studentId")
    await db[SUPPORT_ACTIVITY_LOGS].create_index("timestamp")

    logger.info("Indexes created")

# ==================== HELPERS ====================

def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Identifier for embedded sub-documents"""
    return str(ObjectId())


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """ObjectId for a hex string, None if it is not one"""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def serialize_mongo(doc: Optional[dict]) -> Optional[dict]:
    if doc is None:
        return None
    doc = dict(doc)
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def serialize_many(docs: List[dict]) -> List[dict]:
    return [serialize_mongo(doc) for doc in docs]

# ==================== GENERIC CRUD ====================

async def insert_document(db: AsyncIOMotorDatabase, collection: str, doc: Dict[str, Any]) -> dict:
    """Insert and return the stored document (with its new _id)"""
    result = await db[collection].insert_one(doc)
    doc["_id"] = result.inserted_id
    return doc


async def list_documents(
    db: AsyncIOMotorDatabase,
    collection: str,
    query: Optional[dict] = None,
    projection: Optional[dict] = None,
    sort: Optional[list] = None,
) -> List[dict]:
    kwargs = {"sort": sort} if sort else {}
    cursor = db[collection].find(query or {}, projection, **kwargs)
    return await cursor.to_list(length=None)


async def find_by_id(
    db: AsyncIOMotorDatabase,
    collection: str,
    doc_id: Any,
    query: Optional[dict] = None,
    projection: Optional[dict] = None,
) -> Optional[dict]:
    oid = parse_object_id(doc_id)
    if oid is None:
        return None
    return await db[collection].find_one({"_id": oid, **(query or {})}, projection)


async def update_by_id(
    db: AsyncIOMotorDatabase,
    collection: str,
    doc_id: Any,
    updates: Dict[str, Any],
    projection: Optional[dict] = None,
) -> Optional[dict]:
    """$set the given fields, return the document after the update or None"""
    oid = parse_object_id(doc_id)
    if oid is None:
        return None
    if not updates:
        return await db[collection].find_one({"_id": oid}, projection)
    return await db[collection].find_one_and_update(
        {"_id": oid},
        {"$set": updates},
        projection=projection,
        return_document=ReturnDocument.AFTER,
    )


async def delete_by_id(db: AsyncIOMotorDatabase, collection: str, doc_id: Any) -> bool:
    oid = parse_object_id(doc_id)
    if oid is None:
        return False
    result = await db[collection].delete_one({"_id": oid})
    return result.deleted_count > 0
