from enum import Enum
from pydantic import BaseModel, Field, AliasChoices
from datetime import datetime
from typing import Optional, Dict, Any, List
from .base import CamelModel

class VerificationStatus(str, Enum):
    """검증 1회당 하나의 최종 상태"""
    SOLVED = "solved"
    PENDING = "pending"
    REJECTED = "rejected"
    INVALID_URL = "invalid_url"
    UNKNOWN_PROBLEM = "unknown_problem"

ACCEPTED_STATUSES = (VerificationStatus.SOLVED, VerificationStatus.PENDING)
FATAL_STATUSES = (VerificationStatus.INVALID_URL, VerificationStatus.UNKNOWN_PROBLEM)

class ProfileCheck(BaseModel):
    """프로필 활동 피드 대조 결과"""
    verified: bool
    entry: Optional[Dict[str, Any]] = None
    unavailable: bool = False

class VerificationDecision(BaseModel):
    accepted: bool
    status: VerificationStatus
    reason: str
    matched_slug: Optional[str] = None
    method: Optional[str] = None
    external_unavailable: bool = False

    @property
    def is_fatal(self) -> bool:
        return self.status in FATAL_STATUSES

    @property
    def verified(self) -> bool:
        return self.status == VerificationStatus.SOLVED

class VerifySubmissionRequest(CamelModel):
    submission_url: Optional[str] = None
    problem_url: Optional[str] = None
    external_username: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("externalUsername", "hackerRankUsername", "external_username"),
    )

class VerifySubmissionResponse(CamelModel):
    success: bool
    verified: bool = False
    status: Optional[VerificationStatus] = None
    reason: Optional[str] = None
    matched_slug: Optional[str] = None
    method: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_decision(cls, decision: VerificationDecision) -> "VerifySubmissionResponse":
        if decision.is_fatal:
            return cls(success=False, status=decision.status, error=decision.reason)
        return cls(
            success=True,
            verified=decision.verified,
            status=decision.status,
            reason=decision.reason,
            matched_slug=decision.matched_slug,
            method=decision.method,
        )

class SyncRequest(CamelModel):
    username: Optional[str] = None

class SyncResponse(CamelModel):
    success: bool
    last_synced: datetime
    submissions: List[Dict[str, Any]]

class ProfileVerifyRequest(CamelModel):
    username: Optional[str] = None

class ProfileVerifyResponse(CamelModel):
    verified: bool
    username: str
