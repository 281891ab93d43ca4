from motor.motor_asyncio import AsyncIOMotorDatabase
from fastapi import HTTPException
from pymongo.errors import DuplicateKeyError

from tutorhub import config
from tutorhub.app_logger import get_logger
from tutorhub.auth.auth_models import (
    RegisterRequest, TeacherLoginRequest, SupportLoginRequest, StudentLoginRequest
)
from tutorhub.database import USERS, insert_document, parse_object_id, utcnow
from tutorhub.security import get_password_hash, verify_password
from tutorhub.users.user_models import StudentDocument, TeacherDocument, UserType

logger = get_logger("auth")


def login_user(user: dict, **extra) -> dict:
    return {"id": str(user["_id"]), "name": user["fullName"], "type": user["type"], **extra}

# ==================== STUDENTS ====================

async def register_student(db: AsyncIOMotorDatabase, data: RegisterRequest) -> str:
    """
    Create a student account.
    The same student number or full name may only be registered once.
    """
    existing = await db[USERS].find_one({
        "type": UserType.STUDENT.value,
        "$or": [
            {"studentNumber": data.student_number},
            {"fullName": data.full_name},
        ],
    })
    if existing:
        raise HTTPException(status_code=409, detail="Student with this number or name already exists.")

    student = StudentDocument(
        full_name=data.full_name,
        password=get_password_hash(data.password),
        student_number=data.student_number,
        parent_number=data.parent_number,
        grade_level=data.grade_level,
    )

    try:
        doc = await insert_document(db, USERS, student.to_document())
    except DuplicateKeyError:
        raise HTTPException(status_code=409, detail="Student with this number or name already exists.")

    logger.info("Registered student %s", doc["_id"])
    return str(doc["_id"])


async def login_student(db: AsyncIOMotorDatabase, data: StudentLoginRequest) -> dict:
    if not data.student_number or not data.password:
        raise HTTPException(status_code=401, detail="Invalid student credentials.")

    student = await db[USERS].find_one({
        "type": UserType.STUDENT.value,
        "studentNumber": data.student_number,
    })
    if not student or not verify_password(data.password, student.get("password")):
        raise HTTPException(status_code=401, detail="Invalid student credentials.")

    if student.get("isBanned"):
        raise HTTPException(status_code=403, detail=student.get("banReason") or "Account is banned.")

    await db[USERS].update_one({"_id": student["_id"]}, {"$set": {"lastActivity": utcnow()}})
    return login_user(student, gradeLevel=student.get("gradeLevel"))

# ==================== TEACHERS ====================

def teacher_credentials_match(data: TeacherLoginRequest) -> bool:
    return (
        data.name == config.TEACHER_NAME
        and data.code == config.TEACHER_CODE
        and data.phone == config.TEACHER_PHONE
    )


async def login_teacher(db: AsyncIOMotorDatabase, data: TeacherLoginRequest) -> dict:
    """
    Fixed credential check, then find-or-create the teacher document.
    Nothing is written when the credentials do not match.
    """
    if not teacher_credentials_match(data):
        raise HTTPException(status_code=401, detail="Invalid teacher credentials.")

    teacher = await db[USERS].find_one({"type": UserType.TEACHER.value, "teacherCode": data.code})
    if not teacher:
        new_teacher = TeacherDocument(
            full_name=data.name,
            teacher_code=data.code,
            phone_number=data.phone,
            password=get_password_hash(config.TEACHER_PLACEHOLDER_PASSWORD),
        )
        teacher = await insert_document(db, USERS, new_teacher.to_document())
        logger.info("Created teacher document %s on first login", teacher["_id"])

    return login_user(teacher)

# ==================== SUPPORT STAFF ====================

async def login_support(db: AsyncIOMotorDatabase, data: SupportLoginRequest) -> dict:
    if not data.name or not data.code:
        raise HTTPException(status_code=401, detail="Invalid support credentials.")

    support = await db[USERS].find_one_and_update(
        {"type": UserType.SUPPORT.value, "fullName": data.name, "supportCode": data.code},
        {"$set": {"isOnline": True, "lastActivity": utcnow()}},
    )
    if not support:
        raise HTTPException(status_code=401, detail="Invalid support credentials.")

    return login_user(support)


async def logout_support(db: AsyncIOMotorDatabase, support_id: str):
    result = await db[USERS].update_one(
        {"_id": parse_object_id(support_id), "type": UserType.SUPPORT.value},
        {"$set": {"isOnline": False, "lastLogout": utcnow()}},
    )
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Support user not found.")
