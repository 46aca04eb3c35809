from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List
from .base import ResponseBase
from .verification import VerificationStatus

class SubmissionRecordCreate(BaseModel):
    """검증 결과와 함께 저장할 제출 정보"""
    user_id: str
    problem_id: int
    lab_id: str
    submission_url: str
    code: Optional[str] = None
    language: Optional[str] = None
    proof_file_id: Optional[str] = None

class SubmissionResponse(BaseModel):
    id: int
    user_id: str
    problem_id: int
    lab_id: str
    status: str
    submission_url: Optional[str] = None
    submission_url_hash: Optional[str] = None
    language: Optional[str] = None
    code: Optional[str] = None
    proof_file_id: Optional[str] = None
    submitted_at: Optional[datetime] = None
    verified_at: Optional[datetime] = None
    verified_by: Optional[str] = None

    class Config:
        from_attributes = True

class SubmissionResultResponse(BaseModel):
    """제출 처리 결과 응답"""
    success: bool
    verified: bool
    status: VerificationStatus
    reason: Optional[str] = None
    matched_slug: Optional[str] = None
    error: Optional[str] = None
    submission: Optional[SubmissionResponse] = None

class SubmissionListResponse(ResponseBase[List[SubmissionResponse]]):
    """제출물 목록 응답"""
    pass
