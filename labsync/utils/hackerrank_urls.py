import re
from typing import Optional
from urllib.parse import urlsplit, quote

HACKERRANK_BASE_URL = "https://www.hackerrank.com"

# 영문, 숫자, 밑줄 3~30자
_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,30}$")


def parse_absolute_url(url: Optional[str]):
    if not url or not isinstance(url, str):
        return None
    try:
        parts = urlsplit(url.strip())
        # 포트 값이 잘못된 경우 여기서 ValueError 발생
        parts.port
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return parts


def extract_challenge_slug(url: Optional[str]) -> Optional[str]:
    """챌린지 URL에서 slug 추출

    지원 형식:
      https://www.hackerrank.com/challenges/two-sum/problem
      https://www.hackerrank.com/challenges/two-sum/submissions/123456
      https://www.hackerrank.com/rest/contests/master/challenges/two-sum/submissions/123456
    """
    parts = parse_absolute_url(url)
    if parts is None:
        return None

    segments = [segment for segment in parts.path.split("/") if segment]
    try:
        index = segments.index("challenges")
    except ValueError:
        return None

    if index + 1 >= len(segments):
        return None
    return segments[index + 1].lower()


def is_hackerrank_url(url: Optional[str], domain: str = "hackerrank.com") -> bool:
    parts = parse_absolute_url(url)
    if parts is None or parts.scheme.lower() not in ("http", "https"):
        return False
    host = (parts.hostname or "").lower()
    domain = domain.lower()
    return host == domain or host.endswith("." + domain)


def is_valid_external_username(username: Optional[str]) -> bool:
    return bool(username) and bool(_USERNAME_PATTERN.match(username))


def build_profile_url(username: str, base_url: str = HACKERRANK_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{quote(username, safe='')}"
