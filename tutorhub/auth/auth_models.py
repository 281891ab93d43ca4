from typing import Optional

from pydantic import Field

from tutorhub.common import CamelModel, Grade, ObjectIdStr

# ==================== REQUEST MODELS ====================

class RegisterRequest(CamelModel):
    full_name: str = Field(..., min_length=1)
    student_number: str = Field(..., min_length=1)
    parent_number: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    grade_level: Grade


class TeacherLoginRequest(CamelModel):
    # Missing fields are a credential mismatch (401), not a validation error
    name: Optional[str] = None
    code: Optional[str] = None
    phone: Optional[str] = None


class SupportLoginRequest(CamelModel):
    name: Optional[str] = None
    code: Optional[str] = None


class SupportLogoutRequest(CamelModel):
    support_id: ObjectIdStr


class StudentLoginRequest(CamelModel):
    student_number: Optional[str] = None
    password: Optional[str] = None

# ==================== RESPONSE MODELS ====================

class LoginUser(CamelModel):
    id: str
    name: str
    type: str
    grade_level: Optional[str] = None


class LoginResponse(CamelModel):
    message: str
    user: LoginUser


class RegisterResponse(CamelModel):
    message: str
    student_id: str
