import asyncio
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import aiohttp

from labsync.core.config import Settings
from labsync.core.exceptions import ExternalServiceError
from labsync.schemas.verification import ProfileCheck
from labsync.services.base_service import BaseService
from labsync.utils.hackerrank_urls import build_profile_url

logger = logging.getLogger(__name__)


def find_challenge_entry(entries: List[Any], slug: str) -> Optional[Dict[str, Any]]:
    """최근 활동 목록에서 slug 와 일치하는 항목 검색"""
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        if entry.get("ch_slug") == slug or entry.get("url") == f"/challenges/{slug}":
            return entry
    return None


class HackerRankClient(BaseService):
    """HackerRank 공개 REST 엔드포인트 클라이언트

    문서화되지 않은 엔드포인트라 응답 형식이 바뀔 수 있다.
    호출마다 세션을 새로 열고 닫는다.
    """

    def __init__(self, settings: Settings):
        super().__init__(settings)
        self.base_url = settings.HACKERRANK_BASE_URL.rstrip("/")
        self.activity_limit = settings.HACKERRANK_ACTIVITY_LIMIT
        self.headers = {"User-Agent": settings.HACKERRANK_USER_AGENT}
        self.timeout = aiohttp.ClientTimeout(total=settings.HACKERRANK_TIMEOUT_SECONDS)

    def _recent_challenges_url(self, username: str) -> str:
        return f"{self.base_url}/rest/hackers/{quote(username, safe='')}/recent_challenges"

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        async with aiohttp.ClientSession(headers=self.headers, timeout=self.timeout) as session:
            async with session.get(url, params=params) as response:
                response.raise_for_status()
                return await response.json(content_type=None)

    async def _head_status(self, url: str) -> int:
        async with aiohttp.ClientSession(headers=self.headers, timeout=self.timeout) as session:
            async with session.head(url, allow_redirects=True) as response:
                return response.status

    async def fetch_recent_challenges(
        self,
        username: str,
        response_version: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """최근 풀이 활동 조회 (최대 activity_limit 개)"""
        params: Dict[str, Any] = {"limit": self.activity_limit}
        if response_version:
            params["response_version"] = response_version

        try:
            data = await self._get_json(self._recent_challenges_url(username), params=params)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise ExternalServiceError(f"HackerRank API error: {e}") from e

        models = data.get("models") if isinstance(data, dict) else None
        if not isinstance(models, list):
            return []
        return models

    async def verify_with_profile(self, username: str, expected_slug: str) -> ProfileCheck:
        """프로필 최근 활동에 해당 문제가 있는지 확인

        실패해도 예외를 던지지 않고 verified=False 로 처리한다.
        """
        try:
            entries = await self.fetch_recent_challenges(username)
        except ExternalServiceError as e:
            logger.warning(f"Profile verification failed for {username}: {e.message}")
            return ProfileCheck(verified=False, unavailable=True)

        match = find_challenge_entry(entries, expected_slug)
        if match is None:
            logger.info(f"No recent activity for '{expected_slug}' on profile {username}")
            return ProfileCheck(verified=False)

        logger.info(f"Profile {username} confirms challenge '{expected_slug}'")
        return ProfileCheck(verified=True, entry=match)

    async def profile_exists(self, username: str) -> bool:
        """공개 프로필 페이지 존재 여부"""
        url = build_profile_url(username, self.base_url)
        try:
            status = await self._head_status(url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ExternalServiceError(f"HackerRank profile check failed: {e}") from e

        if 200 <= status < 300:
            return True
        if status == 404:
            return False
        raise ExternalServiceError(f"HackerRank profile check returned HTTP {status}")
