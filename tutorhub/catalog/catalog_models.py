from datetime import datetime
from enum import Enum
from typing import ClassVar, List, Optional, Tuple

from pydantic import Field

from tutorhub.common import CamelModel, Grade, ObjectIdStr, PartialUpdate
from tutorhub.database import new_id, utcnow

# ==================== ENUMS ====================

class Availability(str, Enum):
    AVAILABLE = "available"
    LIMITED = "limited"
    UNAVAILABLE = "unavailable"

# ==================== LESSONS ====================

class ExamQuestion(CamelModel):
    question: str
    choices: List[str] = []
    correct_answer: int = Field(..., ge=0)


class LessonCreate(CamelModel):
    title: str
    price: float
    description: str
    grade: Grade
    # Media fields are opaque keys owned by the file storage service
    cover_image: Optional[str] = None
    video_file: Optional[str] = None
    pdf_file: Optional[str] = None
    homework_file: Optional[str] = None
    solution_file: Optional[str] = None
    homework_solution_video: Optional[str] = None
    exam_questions: List[ExamQuestion] = []
    is_active: bool = True


class LessonUpdate(PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("title", "price", "description", "grade", "exam_questions", "is_active")

    title: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    grade: Optional[Grade] = None
    cover_image: Optional[str] = None
    video_file: Optional[str] = None
    pdf_file: Optional[str] = None
    homework_file: Optional[str] = None
    solution_file: Optional[str] = None
    homework_solution_video: Optional[str] = None
    exam_questions: Optional[List[ExamQuestion]] = None
    is_active: Optional[bool] = None


def with_question_ids(doc: dict) -> dict:
    """Give every embedded exam question its own _id"""
    if doc.get("examQuestions"):
        doc["examQuestions"] = [{"_id": new_id(), **q} for q in doc["examQuestions"]]
    return doc


def lesson_document(data: LessonCreate) -> dict:
    now = utcnow()
    doc = data.to_document()
    doc["createdAt"] = now
    doc["updatedAt"] = now
    return with_question_ids(doc)


def lesson_updates(data: LessonUpdate) -> dict:
    updates = with_question_ids(data.changed_fields())
    updates["updatedAt"] = utcnow()
    return updates

# ==================== SUBSCRIPTIONS ====================

class SubscriptionCreate(CamelModel):
    name: str
    description: str
    price: float
    image: Optional[str] = None
    duration: int = Field(..., description="Length in days")
    included_lessons: List[ObjectIdStr] = []
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)


class SubscriptionUpdate(PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("name", "description", "price", "duration", "included_lessons", "is_active")

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    image: Optional[str] = None
    duration: Optional[int] = None
    included_lessons: Optional[List[ObjectIdStr]] = None
    is_active: Optional[bool] = None

# ==================== BOOKS ====================

class BookCreate(CamelModel):
    name: str
    description: str
    price: float
    grade: Grade
    image_key: Optional[str] = None
    availability: Availability = Availability.AVAILABLE
    created_at: datetime = Field(default_factory=utcnow)


class BookUpdate(PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("name", "description", "price", "grade", "availability")

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    grade: Optional[Grade] = None
    image_key: Optional[str] = None
    availability: Optional[Availability] = None
