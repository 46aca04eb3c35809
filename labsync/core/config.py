from pydantic_settings import BaseSettings
from typing import List, Optional
from functools import lru_cache
from pathlib import Path

# 기본 디렉토리 설정
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    # 기본 경로 설정
    BASE_DIR: Path = BASE_DIR
    UPLOAD_DIR: Path = BASE_DIR / "uploads"

    # 디버그 설정
    DEBUG: bool = True
    CORS_ORIGINS: List[str] = ["*"]

    # HackerRank 설정 (문서화되지 않은 REST 엔드포인트, 변경될 수 있음)
    HACKERRANK_BASE_URL: str = "https://www.hackerrank.com"
    HACKERRANK_DOMAIN: str = "hackerrank.com"
    HACKERRANK_ACTIVITY_LIMIT: int = 20
    HACKERRANK_USER_AGENT: str = "Mozilla/5.0 (compatible; LabSync/1.0;)"
    HACKERRANK_TIMEOUT_SECONDS: float = 10.0

    # 증빙 파일 업로드 설정
    PROOF_ALLOWED_EXTENSIONS: List[str] = ["jpg", "jpeg", "png", "pdf"]
    PROOF_MAX_BYTES: int = 5 * 1024 * 1024

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "labsync_user"
    POSTGRES_PASSWORD: str = "labsync_password"
    POSTGRES_DB: str = "labsync_db"
    POSTGRES_PORT: str = "5432"
    DATABASE_URL_OVERRIDE: Optional[str] = None

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

@lru_cache()
def get_settings():
    settings = Settings()
    # 업로드 디렉토리 생성
    settings.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    return settings

settings = get_settings()
