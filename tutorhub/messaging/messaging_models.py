from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from tutorhub.common import CamelModel, ObjectIdStr
from tutorhub.database import utcnow
from tutorhub.users.user_models import StaffType

# ==================== ENUMS ====================

class MessageTarget(str, Enum):
    ALL = "all"
    FIRST = "first"
    SECOND = "second"
    THIRD = "third"


class MessagePriority(str, Enum):
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class MessageStatus(str, Enum):
    UNREAD = "unread"
    READ = "read"
    REPLIED = "replied"


class NotificationType(str, Enum):
    SUPPORT = "support"
    TEACHER = "teacher"
    SYSTEM = "system"
    PAYMENT = "payment"
    EXAM = "exam"
    GENERAL = "general"

# ==================== GENERAL MESSAGES ====================

class GeneralMessageCreate(CamelModel):
    """Broadcast from a teacher to one grade or to everyone"""
    target: MessageTarget
    title: str
    content: str
    duration: int = Field(..., description="Days the message stays visible")
    priority: MessagePriority = MessagePriority.NORMAL
    teacher_id: ObjectIdStr
    created_at: datetime = Field(default_factory=utcnow)

# ==================== STUDENT MESSAGES ====================

class StudentMessageCreate(CamelModel):
    student_id: ObjectIdStr
    lesson_id: Optional[ObjectIdStr] = None
    subject: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    image_key: Optional[str] = None


class ReplyCreate(CamelModel):
    responder_type: StaffType
    responder_id: ObjectIdStr
    reply_text: Optional[str] = None
    reply_image_key: Optional[str] = None
    reply_audio_key: Optional[str] = None

# ==================== NOTIFICATIONS ====================

class NotificationCreate(CamelModel):
    student_id: ObjectIdStr
    type: NotificationType
    title: str
    message: str
    can_reply: bool = False
    related_id: Optional[str] = None
