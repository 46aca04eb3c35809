from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
import logging

from labsync import models
from labsync.database import get_db
from labsync.schemas.student import StudentProfileUpdate, StudentProfileResponse

router = APIRouter(prefix="/students", tags=["students"])
logger = logging.getLogger(__name__)

@router.get("/{user_id}/profile", response_model=StudentProfileResponse)
async def get_profile(
    user_id: str,
    db: AsyncSession = Depends(get_db)
):
    student = await db.get(models.StudentProfile, user_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student

@router.put("/{user_id}/profile", response_model=StudentProfileResponse)
async def update_profile(
    user_id: str,
    update_data: StudentProfileUpdate,
    db: AsyncSession = Depends(get_db)
):
    """학생 정보 및 HackerRank 사용자명 업데이트"""
    try:
        student = await db.get(models.StudentProfile, user_id)
        if not student:
            student = models.StudentProfile(id=user_id)
            db.add(student)

        if update_data.name is not None:
            student.name = update_data.name
        if update_data.email is not None:
            student.email = update_data.email
        if update_data.hackerrank_username is not None:
            student.set_hackerrank_username(update_data.hackerrank_username)

        await db.commit()
        await db.refresh(student)
        logger.info(f"Student profile updated: {user_id}")
        return student

    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Email is already in use")
    except Exception as e:
        await db.rollback()
        logger.error(f"Error updating profile: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update profile")
