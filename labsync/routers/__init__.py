from .verification import router as verification_router
from .submission import router as submission_router
from .problems import router as problem_router
from .students import router as student_router

__all__ = [
    'verification_router',
    'submission_router',
    'problem_router',
    'student_router'
]
