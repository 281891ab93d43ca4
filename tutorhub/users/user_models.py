from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import Field

from tutorhub.common import CamelModel, Grade, ObjectIdStr
from tutorhub.database import utcnow

# ==================== ENUMS ====================

class UserType(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"
    SUPPORT = "support"


class StaffType(str, Enum):
    """Tag for references that point at a teacher or a support user"""
    TEACHER = "Teacher"
    SUPPORT_STAFF = "SupportStaff"


# Staff tag -> user discriminator stored in the users collection
STAFF_USER_TYPES = {
    StaffType.TEACHER.value: UserType.TEACHER.value,
    StaffType.SUPPORT_STAFF.value: UserType.SUPPORT.value,
}

# ==================== DATABASE MODELS ====================

class UserDocument(CamelModel):
    """
    Shared fields of every account in the users collection.
    `type` selects which subtype fields apply.
    """
    full_name: str
    password: str  # bcrypt hash
    type: UserType
    created_at: datetime = Field(default_factory=utcnow)
    last_activity: datetime = Field(default_factory=utcnow)


class StudentDocument(UserDocument):
    type: Literal["student"] = "student"
    student_number: Optional[str] = None
    parent_number: Optional[str] = None
    grade_level: Grade = Grade.ALL
    balance: float = 0
    points: int = 0
    is_banned: bool = False
    ban_reason: Optional[str] = None
    banned_at: Optional[datetime] = None
    banned_by: Optional[ObjectIdStr] = None
    banned_by_type: Optional[StaffType] = None


class TeacherDocument(UserDocument):
    type: Literal["teacher"] = "teacher"
    teacher_code: str
    phone_number: str


class SupportStaffDocument(UserDocument):
    type: Literal["support"] = "support"
    support_code: str
    is_online: bool = False
    last_logout: Optional[datetime] = None

# ==================== REQUEST MODELS ====================

class BanRequest(CamelModel):
    reason: str = Field(..., min_length=1)
    banned_by: ObjectIdStr
    banned_by_type: StaffType
