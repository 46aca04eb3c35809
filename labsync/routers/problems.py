from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from labsync import models
from labsync.database import get_db
from labsync.schemas.problem import ProblemCreate, ProblemResponse
from labsync.utils.hackerrank_urls import extract_challenge_slug

router = APIRouter(prefix="/problems", tags=["problems"])
logger = logging.getLogger(__name__)

@router.post("", response_model=ProblemResponse, status_code=201)
async def create_problem(
    problem_data: ProblemCreate,
    db: AsyncSession = Depends(get_db)
):
    """문제 등록 (slug는 URL에서 추출)"""
    external_url = problem_data.external_url.strip()
    slug = extract_challenge_slug(external_url)
    if not slug:
        raise HTTPException(
            status_code=422,
            detail="Could not determine problem slug from URL. Expected .../challenges/<slug>/problem"
        )

    try:
        problem = models.Problem(
            title=problem_data.title,
            external_url=external_url,
            slug=slug,
            difficulty=problem_data.difficulty,
            points=problem_data.points,
            lab_id=problem_data.lab_id
        )
        db.add(problem)
        await db.commit()
        await db.refresh(problem)
        logger.info(f"Problem created: {problem.id} ({slug})")
        return problem
    except Exception as e:
        await db.rollback()
        logger.error(f"Error creating problem: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create problem")

@router.get("/{problem_id}", response_model=ProblemResponse)
async def get_problem(
    problem_id: int,
    db: AsyncSession = Depends(get_db)
):
    problem = await db.get(models.Problem, problem_id)
    if not problem:
        raise HTTPException(status_code=404, detail="Problem not found")
    return problem
