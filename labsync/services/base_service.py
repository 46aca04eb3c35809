from pathlib import Path
from labsync.core.config import Settings

class BaseService:
    def __init__(self, settings: Settings):
        self.settings = settings

    def _get_full_path(self, relative_path: str) -> Path:
        """상대 경로를 업로드 디렉토리 기준 절대 경로로 변환"""
        return Path(self.settings.UPLOAD_DIR) / relative_path
