import logging
from typing import Optional

from labsync.schemas.verification import (
    VerificationDecision,
    VerificationStatus,
)
from labsync.services.hackerrank.hackerrank_client import HackerRankClient
from labsync.utils.hackerrank_urls import extract_challenge_slug, is_hackerrank_url, parse_absolute_url

logger = logging.getLogger(__name__)

PENDING_REASON = "Submission recorded but NOT verified. Pending manual review."
UNAVAILABLE_REASON = (
    "HackerRank profile activity could not be checked right now. "
    "Submission recorded but NOT verified. Pending manual review."
)


class VerificationEngine:
    """제출 URL 검증 결정 엔진

    순서: URL 구조 검사, slug 추출, slug 일치 검사, 프로필 대조, 보류 처리.
    호출 한 번에 최종 상태 하나만 반환하며 예상된 실패에 대해 예외를 던지지 않는다.
    """

    def __init__(self, hackerrank_client: HackerRankClient, domain: str = "hackerrank.com"):
        self.hackerrank_client = hackerrank_client
        self.domain = domain

    def _fail(self, status: VerificationStatus, reason: str) -> VerificationDecision:
        logger.info(f"Verification failed: {status.value} ({reason})")
        return VerificationDecision(accepted=False, status=status, reason=reason)

    async def verify(
        self,
        submission_url: Optional[str],
        problem_url: Optional[str],
        username: Optional[str] = None
    ) -> VerificationDecision:
        submission_url = (submission_url or "").strip()
        username = (username or "").strip() or None

        # 1. URL 구조 검사
        if parse_absolute_url(submission_url) is None:
            return self._fail(VerificationStatus.INVALID_URL, "Invalid URL format")
        if not is_hackerrank_url(submission_url, self.domain):
            return self._fail(VerificationStatus.INVALID_URL, f"URL must be from {self.domain}")

        # 2. slug 추출
        submitted_slug = extract_challenge_slug(submission_url)
        expected_slug = extract_challenge_slug(problem_url)
        if not expected_slug:
            return self._fail(VerificationStatus.UNKNOWN_PROBLEM, "Could not determine problem slug")

        # 3. 다른 문제의 제출 링크면 프로필 상태와 무관하게 거절
        if submitted_slug and submitted_slug != expected_slug:
            return self._fail(
                VerificationStatus.REJECTED,
                f'Submission URL is for problem "{submitted_slug}", '
                f'but this assignment is for "{expected_slug}"'
            )

        # 4. 프로필 활동 대조
        external_unavailable = False
        if username:
            check = await self.hackerrank_client.verify_with_profile(username, expected_slug)
            if check.verified:
                logger.info(f"Verified '{expected_slug}' for {username} via profile activity")
                return VerificationDecision(
                    accepted=True,
                    status=VerificationStatus.SOLVED,
                    reason="Verified against HackerRank profile activity!",
                    matched_slug=expected_slug,
                    method="profile",
                )
            external_unavailable = check.unavailable

        # 5. 형식은 맞지만 확인되지 않음: 수동 검토 대기
        logger.info(f"Submission for '{expected_slug}' left pending review")
        return VerificationDecision(
            accepted=True,
            status=VerificationStatus.PENDING,
            reason=UNAVAILABLE_REASON if external_unavailable else PENDING_REASON,
            matched_slug=submitted_slug,
            method="url_slug_format",
            external_unavailable=external_unavailable,
        )
