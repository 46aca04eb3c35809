import hashlib
import re
from urllib.parse import urlsplit

DEFAULT_PORTS = {"http": 80, "https": 443}

_TRAILING = re.compile(r"[\s/]+$")


def _trim_trailing(value: str) -> str:
    return _TRAILING.sub("", value)


def normalize_url(url: str) -> str:
    """scheme + host + path 만 남기고 소문자로 정규화

    사용자 정보, 기본 포트, 쿼리 문자열, fragment, 끝의 슬래시/공백은 제거된다.
    파싱할 수 없는 값은 공백 제거 후 소문자로 그대로 사용한다.
    """
    raw = (url or "").strip()
    try:
        parts = urlsplit(raw)
        port = parts.port
    except ValueError:
        parts = None

    if parts is None or not parts.scheme or not parts.hostname:
        return _trim_trailing(raw.lower())

    scheme = parts.scheme.lower()
    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    if port is not None and port != DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"

    return _trim_trailing(f"{scheme}://{host}{parts.path}".lower())


def hash_submission_url(url: str) -> str:
    """중복 제출 방지용 SHA-256 해시"""
    return hashlib.sha256(normalize_url(url).encode("utf-8")).hexdigest()
