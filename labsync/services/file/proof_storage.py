from fastapi import UploadFile
import aiofiles
import os
import re
import uuid
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional
from labsync.core.config import Settings
from labsync.core.exceptions import InvalidProofFileError
from labsync.services.base_service import BaseService

logger = logging.getLogger(__name__)

class ProofStorageService(BaseService):
    """제출 증빙 파일(이미지, PDF) 저장소"""

    def __init__(self, settings: Settings):
        super().__init__(settings)
        self.allowed_extensions = {ext.lower().lstrip(".") for ext in settings.PROOF_ALLOWED_EXTENSIONS}
        self.max_bytes = settings.PROOF_MAX_BYTES

    def _validate_extension(self, filename: Optional[str]) -> str:
        extension = os.path.splitext(filename or "")[1].lower().lstrip(".")
        if extension not in self.allowed_extensions:
            allowed = ", ".join(sorted(self.allowed_extensions))
            raise InvalidProofFileError(f"Proof file must be one of: {allowed}")
        return extension

    async def save_proof(self, user_id: str, file: UploadFile) -> str:
        """파일 저장 후 proof_file_id(상대 경로) 반환"""
        extension = self._validate_extension(file.filename)

        content = await file.read()
        if not content:
            raise InvalidProofFileError("Proof file is empty")
        if len(content) > self.max_bytes:
            raise InvalidProofFileError(
                f"Proof file is larger than {self.max_bytes} bytes"
            )

        # 파일명 생성 (타임스탬프 포함)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        unique_id = str(uuid.uuid4())[:8]
        # 사용자 ID는 디렉토리명으로 쓰므로 안전한 문자만 남김
        safe_user_id = re.sub(r"[^A-Za-z0-9_-]", "_", user_id)
        relative_path = str(Path("proofs") / safe_user_id / f"{timestamp}_{unique_id}.{extension}")

        full_path = self._get_full_path(relative_path)
        full_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            async with aiofiles.open(full_path, 'wb') as f:
                await f.write(content)
        except OSError as e:
            logger.error(f"Error saving proof file: {str(e)}")
            raise

        logger.info(f"Proof file saved: {relative_path}")
        return relative_path

    async def delete_proof(self, proof_file_id: Optional[str]) -> bool:
        """파일 삭제"""
        if not proof_file_id:
            return True
        try:
            full_path = self._get_full_path(proof_file_id)
            if full_path.exists():
                os.remove(full_path)
                logger.info(f"File deleted: {full_path}")
                return True
            logger.warning(f"File not found: {full_path}")
            return False
        except OSError as e:
            logger.error(f"Error deleting file: {str(e)}")
            return False
