from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from tutorhub.app_logger import get_logger
from tutorhub.auth import auth_service as service
from tutorhub.auth.auth_models import (
    RegisterRequest, RegisterResponse, LoginResponse,
    TeacherLoginRequest, SupportLoginRequest, SupportLogoutRequest, StudentLoginRequest
)
from tutorhub.database import get_db

router = APIRouter(prefix="/api/auth", tags=["Authentication"])
logger = get_logger("auth")


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(data: RegisterRequest, db: AsyncIOMotorDatabase = Depends(get_db)):
    """Register a new student account"""
    try:
        student_id = await service.register_student(db, data)
        return {"message": "Student registered successfully", "studentId": student_id}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Student registration error")
        raise HTTPException(status_code=500, detail="Server error during registration.")


@router.post("/student-login", response_model=LoginResponse)
async def student_login(data: StudentLoginRequest, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        user = await service.login_student(db, data)
        return {"message": "Student login successful", "user": user}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Student login error")
        raise HTTPException(status_code=500, detail="Server error during student login.")


@router.post("/teacher-login", response_model=LoginResponse, response_model_exclude_none=True)
async def teacher_login(data: TeacherLoginRequest, db: AsyncIOMotorDatabase = Depends(get_db)):
    """
    Placeholder login: a single configured name/code/phone triple.
    The teacher document is created on the first successful login.
    """
    try:
        user = await service.login_teacher(db, data)
        return {"message": "Teacher login successful", "user": user}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Teacher login error")
        raise HTTPException(status_code=500, detail="Server error during teacher login.")


@router.post("/support-login", response_model=LoginResponse, response_model_exclude_none=True)
async def support_login(data: SupportLoginRequest, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        user = await service.login_support(db, data)
        return {"message": "Support login successful", "user": user}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Support login error")
        raise HTTPException(status_code=500, detail="Server error during support login.")


@router.post("/support-logout")
async def support_logout(data: SupportLogoutRequest, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        await service.logout_support(db, data.support_id)
        return {"message": "Support logout successful"}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Support logout error")
        raise HTTPException(status_code=500, detail="Server error during support logout.")
