from .student import StudentProfile
from .problem import Problem
from .submission import Submission

__all__ = [
    "StudentProfile",
    "Problem",
    "Submission"
]
