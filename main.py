from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from dotenv import load_dotenv
import logging
from contextlib import asynccontextmanager

# .env 파일 로드 (설정 import 전에)
load_dotenv()

from labsync.core.config import settings
from labsync.database import init_db
from labsync.dependencies import init_app
from labsync.routers import (
    verification_router,
    submission_router,
    problem_router,
    student_router
)

# 로깅 설정
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 시작/종료 시 실행되는 이벤트 핸들러"""
    try:
        await init_db()
        await init_app(app)
        logger.info("Application startup completed")
        yield
    finally:
        logger.info("Application shutdown")

# FastAPI 앱 설정
app = FastAPI(
    title="LabSync API",
    description="HackerRank lab submission verification API",
    version="1.0.0",
    lifespan=lifespan
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

def init_routers(app: FastAPI):
    """라우터 초기화"""
    app.include_router(verification_router, prefix="/api")
    app.include_router(submission_router, prefix="/api")
    app.include_router(problem_router, prefix="/api")
    app.include_router(student_router, prefix="/api")

init_routers(app)

# 헬스체크 엔드포인트
@app.get("/health")
async def health_check():
    return {"status": "healthy"}

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        reload_dirs=["labsync"]
    )
