from fastapi import APIRouter, Depends, HTTPException
from datetime import datetime, timezone
import logging

from labsync.core.exceptions import ExternalServiceError
from labsync.dependencies import get_hackerrank_client, get_verification_engine
from labsync.services.hackerrank.hackerrank_client import HackerRankClient
from labsync.services.verification.verification_engine import VerificationEngine
from labsync.utils.hackerrank_urls import is_valid_external_username
from labsync.schemas.verification import (
    VerifySubmissionRequest,
    VerifySubmissionResponse,
    SyncRequest,
    SyncResponse,
    ProfileVerifyRequest,
    ProfileVerifyResponse
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["verification"])

@router.post(
    "/verify-submission",
    response_model=VerifySubmissionResponse,
    response_model_exclude_none=True
)
async def verify_submission(
    request: VerifySubmissionRequest,
    engine: VerificationEngine = Depends(get_verification_engine)
):
    """제출 URL 검증 (저장하지 않음)"""
    try:
        decision = await engine.verify(
            submission_url=request.submission_url,
            problem_url=request.problem_url,
            username=request.external_username
        )
        return VerifySubmissionResponse.from_decision(decision)
    except Exception as e:
        logger.error(f"Verification error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Verification failed")

@router.post("/sync", response_model=SyncResponse)
async def sync_submissions(
    request: SyncRequest,
    client: HackerRankClient = Depends(get_hackerrank_client)
):
    """HackerRank 최근 활동 동기화"""
    if not request.username:
        raise HTTPException(status_code=400, detail="Username is required")

    try:
        submissions = await client.fetch_recent_challenges(request.username, response_version="v2")
        logger.info(f"Synced {len(submissions)} recent challenges for {request.username}")
        return SyncResponse(
            success=True,
            last_synced=datetime.now(timezone.utc),
            submissions=submissions
        )
    except ExternalServiceError as e:
        logger.error(f"HackerRank sync error: {e.message}")
        raise HTTPException(status_code=502, detail="Failed to sync submissions")

@router.post("/hackerrank/verify", response_model=ProfileVerifyResponse)
async def verify_profile(
    request: ProfileVerifyRequest,
    client: HackerRankClient = Depends(get_hackerrank_client)
):
    """HackerRank 사용자 존재 여부 확인"""
    if not request.username:
        raise HTTPException(status_code=400, detail="Username is required")
    if not is_valid_external_username(request.username):
        raise HTTPException(status_code=400, detail="Invalid HackerRank username format")

    try:
        exists = await client.profile_exists(request.username)
    except ExternalServiceError as e:
        logger.error(f"HackerRank verification error: {e.message}")
        raise HTTPException(status_code=502, detail="Failed to verify HackerRank profile")

    if not exists:
        raise HTTPException(status_code=404, detail="HackerRank user not found")
    return ProfileVerifyResponse(verified=True, username=request.username)
