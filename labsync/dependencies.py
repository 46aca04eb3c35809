import logging
from typing import Optional
from fastapi import FastAPI, Depends, Request
from labsync.core.config import Settings, get_settings
from labsync.services.hackerrank.hackerrank_client import HackerRankClient
from labsync.services.verification.verification_engine import VerificationEngine
from labsync.services.submission.submission_record_manager import SubmissionRecordManager
from labsync.services.file.proof_storage import ProofStorageService

logger = logging.getLogger(__name__)

class Services:
    """요청 처리에 쓰는 서비스 묶음 (app.state.services 에 보관)"""

    def __init__(
        self,
        settings: Settings,
        hackerrank_client: Optional[HackerRankClient] = None,
        record_manager: Optional[SubmissionRecordManager] = None,
        proof_storage: Optional[ProofStorageService] = None
    ):
        self.settings = settings
        self.hackerrank_client = hackerrank_client if hackerrank_client is not None else HackerRankClient(settings)
        self.verification_engine = VerificationEngine(
            self.hackerrank_client,
            domain=settings.HACKERRANK_DOMAIN
        )
        self.record_manager = record_manager if record_manager is not None else SubmissionRecordManager()
        self.proof_storage = proof_storage if proof_storage is not None else ProofStorageService(settings)

def init_services(app: FastAPI, settings: Optional[Settings] = None) -> Services:
    """서비스 초기화"""
    settings = settings or get_settings()
    logger.info(f"HackerRank endpoint: {settings.HACKERRANK_BASE_URL}")
    app.state.services = Services(settings)
    return app.state.services

def get_services(request: Request) -> Services:
    """서비스 인스턴스 반환"""
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Services not initialized")
    return services

def get_hackerrank_client(services: Services = Depends(get_services)) -> HackerRankClient:
    return services.hackerrank_client

def get_verification_engine(services: Services = Depends(get_services)) -> VerificationEngine:
    return services.verification_engine

def get_record_manager(services: Services = Depends(get_services)) -> SubmissionRecordManager:
    return services.record_manager

def get_proof_storage(services: Services = Depends(get_services)) -> ProofStorageService:
    return services.proof_storage

async def init_app(app: FastAPI):
    """앱 초기화"""
    try:
        init_services(app)
        logger.info("Services initialized successfully")
    except Exception as e:
        logger.error(f"Service initialization failed: {str(e)}")
        raise
