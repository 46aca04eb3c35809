from fastapi import APIRouter, Depends, UploadFile, File, Form, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging

from labsync import models
from labsync.core.exceptions import DuplicateSubmissionUrlError, InvalidProofFileError
from labsync.database import get_db
from labsync.dependencies import get_verification_engine, get_record_manager, get_proof_storage
from labsync.services.verification.verification_engine import VerificationEngine
from labsync.services.submission.submission_record_manager import SubmissionRecordManager
from labsync.services.file.proof_storage import ProofStorageService
from labsync.schemas.verification import VerificationStatus
from labsync.schemas.submission import (
    SubmissionRecordCreate,
    SubmissionResponse,
    SubmissionResultResponse,
    SubmissionListResponse
)

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/submissions",
    tags=["submission"]
)

@router.post("", response_model=SubmissionResultResponse)
async def create_submission(
    user_id: str = Form(...),
    problem_id: int = Form(...),
    submission_url: str = Form(...),
    code: Optional[str] = Form(None),
    language: Optional[str] = Form(None),
    proof: Optional[UploadFile] = File(None),
    engine: VerificationEngine = Depends(get_verification_engine),
    record_manager: SubmissionRecordManager = Depends(get_record_manager),
    proof_storage: ProofStorageService = Depends(get_proof_storage),
    db: AsyncSession = Depends(get_db)
):
    """제출 URL 검증 후 저장"""
    proof_file_id = None
    try:
        logger.info(f"Submission received - user: {user_id}, problem: {problem_id}")

        problem = await db.get(models.Problem, problem_id)
        if not problem:
            raise HTTPException(status_code=404, detail="Problem not found")

        # 학생 확인/생성
        student = await db.get(models.StudentProfile, user_id)
        if not student:
            logger.info(f"Creating student profile: {user_id}")
            student = models.StudentProfile(id=user_id)
            db.add(student)
            await db.commit()
            await db.refresh(student)

        submission_url = submission_url.strip()
        decision = await engine.verify(
            submission_url=submission_url,
            problem_url=problem.external_url,
            username=student.hackerrank_username
        )

        if decision.status == VerificationStatus.INVALID_URL:
            raise HTTPException(status_code=400, detail=decision.reason)
        if decision.status == VerificationStatus.UNKNOWN_PROBLEM:
            raise HTTPException(status_code=422, detail=decision.reason)
        if not decision.accepted:
            # 다른 문제의 링크: 저장하지 않음
            return SubmissionResultResponse(
                success=False,
                verified=False,
                status=decision.status,
                reason=decision.reason,
                error=decision.reason
            )

        if proof is not None and proof.filename:
            proof_file_id = await proof_storage.save_proof(user_id, proof)

        submission = await record_manager.record(
            db,
            SubmissionRecordCreate(
                user_id=user_id,
                problem_id=problem.id,
                lab_id=problem.lab_id,
                submission_url=submission_url,
                code=code,
                language=language,
                proof_file_id=proof_file_id
            ),
            decision
        )

        return SubmissionResultResponse(
            success=True,
            verified=decision.verified,
            status=decision.status,
            reason=decision.reason,
            matched_slug=decision.matched_slug,
            submission=SubmissionResponse.model_validate(submission)
        )

    except HTTPException:
        raise
    except InvalidProofFileError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except DuplicateSubmissionUrlError as e:
        await proof_storage.delete_proof(proof_file_id)
        return JSONResponse(
            status_code=409,
            content={"success": False, "error": e.code, "message": e.message}
        )
    except Exception as e:
        await proof_storage.delete_proof(proof_file_id)
        logger.error(f"Error submitting solution: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to submit. Please ensure your link is correct and try again."
        )

@router.get("", response_model=SubmissionListResponse)
async def get_submissions(
    user_id: Optional[str] = None,
    problem_id: Optional[int] = None,
    record_manager: SubmissionRecordManager = Depends(get_record_manager),
    db: AsyncSession = Depends(get_db)
):
    """제출물 목록 조회"""
    try:
        submissions = await record_manager.list_submissions(db, user_id=user_id, problem_id=problem_id)
        return SubmissionListResponse(
            success=True,
            data=[SubmissionResponse.model_validate(s) for s in submissions]
        )
    except Exception as e:
        logger.error(f"Error fetching submissions: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to load submissions")

@router.post("/{submission_id}/verify", response_model=SubmissionResponse)
async def verify_submission_manually(
    submission_id: int,
    record_manager: SubmissionRecordManager = Depends(get_record_manager),
    db: AsyncSession = Depends(get_db)
):
    """보류 중인 제출물 수동 승인"""
    try:
        submission = await record_manager.approve(db, submission_id)
        if not submission:
            raise HTTPException(status_code=404, detail="Submission not found")
        return SubmissionResponse.model_validate(submission)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error verifying submission {submission_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to verify submission")
