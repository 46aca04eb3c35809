from typing import Optional


class LabSyncError(Exception):
    """LabSync 기본 예외"""
    code = "labsync_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ExternalServiceError(LabSyncError):
    """HackerRank 피드 호출 실패"""
    code = "external_unavailable"


class DuplicateSubmissionUrlError(LabSyncError):
    """다른 제출물이 이미 같은 URL 해시를 사용 중"""
    code = "duplicate_submission"

    def __init__(self, url_hash: str, message: Optional[str] = None):
        super().__init__(
            message
            or "This submission link has already been used by another student. "
            "Please submit the unique submission link of the problem you solved."
        )
        self.url_hash = url_hash


class SubmissionNotAcceptedError(LabSyncError):
    """검증을 통과하지 못한 결정은 저장하지 않음"""
    code = "not_accepted"

    def __init__(self, status: str, reason: Optional[str] = None):
        super().__init__(reason or f"Submission was not accepted (status: {status})")
        self.status = status


class InvalidProofFileError(LabSyncError):
    code = "invalid_proof"
