import unittest
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from labsync import models
from labsync.database import Base

PROBLEM_URL = "https://www.hackerrank.com/challenges/two-sum/problem"
SUBMISSION_URL = "https://www.hackerrank.com/challenges/two-sum/submissions/555"


class DatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    """인메모리 sqlite 데이터베이스를 쓰는 테스트 기반 클래스"""

    async def asyncSetUp(self):
        self.engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False
        )

    async def asyncTearDown(self):
        await self.engine.dispose()

    async def add_problem(self, slug="two-sum", lab_id="lab-1"):
        async with self.session_maker() as db:
            problem = models.Problem(
                title=slug.replace("-", " ").title(),
                external_url=f"https://www.hackerrank.com/challenges/{slug}/problem",
                slug=slug,
                difficulty="easy",
                points=10,
                lab_id=lab_id
            )
            db.add(problem)
            await db.commit()
            await db.refresh(problem)
            return problem

    async def add_student(self, user_id, hackerrank_username=None):
        async with self.session_maker() as db:
            student = models.StudentProfile(id=user_id)
            student.set_hackerrank_username(hackerrank_username)
            db.add(student)
            await db.commit()
            return student
