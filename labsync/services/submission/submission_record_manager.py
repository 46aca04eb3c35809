from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError
from datetime import datetime, timezone
from typing import Optional, List
import logging

from labsync import models
from labsync.core.exceptions import DuplicateSubmissionUrlError, SubmissionNotAcceptedError
from labsync.schemas.submission import SubmissionRecordCreate
from labsync.schemas.verification import VerificationDecision, VerificationStatus
from labsync.utils.url_hash import hash_submission_url

logger = logging.getLogger(__name__)

MANUAL_VERIFIER = "manual"

class SubmissionRecordManager:
    """검증 결과 저장

    (user_id, problem_id) 당 제출물은 하나만 유지하고,
    같은 URL 해시를 다른 제출물이 쓰면 DuplicateSubmissionUrlError 를 던진다.
    """

    async def get_submission(
        self,
        db: AsyncSession,
        user_id: str,
        problem_id: int
    ) -> Optional[models.Submission]:
        result = await db.execute(
            select(models.Submission)
            .filter_by(user_id=user_id, problem_id=problem_id)
            .limit(1)
        )
        return result.scalars().first()

    async def list_submissions(
        self,
        db: AsyncSession,
        user_id: Optional[str] = None,
        problem_id: Optional[int] = None
    ) -> List[models.Submission]:
        """제출물 목록 조회"""
        query = select(models.Submission)
        if user_id:
            query = query.filter_by(user_id=user_id)
        if problem_id is not None:
            query = query.filter_by(problem_id=problem_id)

        result = await db.execute(query.order_by(models.Submission.submitted_at.desc()))
        return result.scalars().all()

    async def _hash_used_elsewhere(
        self,
        db: AsyncSession,
        url_hash: str,
        user_id: str,
        problem_id: int
    ) -> bool:
        result = await db.execute(
            select(models.Submission.id).where(
                models.Submission.submission_url_hash == url_hash,
                or_(
                    models.Submission.user_id != user_id,
                    models.Submission.problem_id != problem_id,
                ),
            ).limit(1)
        )
        return result.first() is not None

    def _apply_update(
        self,
        submission: models.Submission,
        payload: SubmissionRecordCreate,
        decision: VerificationDecision,
        url_hash: str
    ) -> None:
        submission.status = decision.status.value
        submission.submission_url = payload.submission_url
        submission.submission_url_hash = url_hash
        submission.code = payload.code
        submission.language = payload.language
        if payload.proof_file_id:
            submission.proof_file_id = payload.proof_file_id

    def _stamp(self, submission: models.Submission, decision: VerificationDecision, now: datetime) -> None:
        verified = decision.status == VerificationStatus.SOLVED
        submission.submitted_at = now
        submission.verified_at = now if verified else None
        submission.verified_by = decision.method if verified else None

    async def record(
        self,
        db: AsyncSession,
        payload: SubmissionRecordCreate,
        decision: VerificationDecision
    ) -> models.Submission:
        """제출물 생성 또는 기존 제출물 갱신"""
        if not decision.accepted:
            raise SubmissionNotAcceptedError(decision.status.value, decision.reason)

        url_hash = hash_submission_url(payload.submission_url)
        now = datetime.now(timezone.utc)

        try:
            existing = await self.get_submission(db, payload.user_id, payload.problem_id)

            if existing:
                # 기존 제출물 갱신 (중복 행 생성 금지)
                submission = existing
                self._apply_update(submission, payload, decision, url_hash)
            else:
                submission = models.Submission(
                    user_id=payload.user_id,
                    problem_id=payload.problem_id,
                    lab_id=payload.lab_id,
                    status=decision.status.value,
                    submission_url=payload.submission_url,
                    submission_url_hash=url_hash,
                    code=payload.code,
                    language=payload.language,
                    proof_file_id=payload.proof_file_id,
                )
                db.add(submission)

            self._stamp(submission, decision, now)

            await db.commit()
            await db.refresh(submission)
            logger.info(
                f"Recorded submission {submission.id} for user {payload.user_id}, "
                f"problem {payload.problem_id}: {submission.status}"
            )
            return submission

        except IntegrityError as e:
            await db.rollback()
            if await self._hash_used_elsewhere(db, url_hash, payload.user_id, payload.problem_id):
                logger.warning(
                    f"Duplicate submission url rejected for user {payload.user_id}, "
                    f"problem {payload.problem_id}"
                )
                raise DuplicateSubmissionUrlError(url_hash) from e

            # 같은 (user, problem) 동시 제출: 먼저 저장된 행을 갱신
            winner = await self.get_submission(db, payload.user_id, payload.problem_id)
            if winner is None:
                logger.error(f"Submission write failed: {str(e)}")
                raise

            self._apply_update(winner, payload, decision, url_hash)
            self._stamp(winner, decision, now)
            await db.commit()
            await db.refresh(winner)
            logger.info(f"Concurrent submission merged into {winner.id} for user {payload.user_id}")
            return winner

    async def approve(
        self,
        db: AsyncSession,
        submission_id: int,
        verified_by: str = MANUAL_VERIFIER
    ) -> Optional[models.Submission]:
        """담당 교사 수동 확인: 제출물을 solved 로 변경

        제출물이 없으면 None 을 반환한다.
        """
        submission = await db.get(models.Submission, submission_id)
        if submission is None:
            return None

        submission.status = VerificationStatus.SOLVED.value
        submission.verified_at = datetime.now(timezone.utc)
        submission.verified_by = verified_by
        await db.commit()
        await db.refresh(submission)
        logger.info(f"Submission {submission_id} manually verified by {verified_by}")
        return submission
