from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal

Difficulty = Literal["easy", "medium", "hard"]

class ProblemCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    external_url: str = Field(..., max_length=1000)
    difficulty: Difficulty = "easy"
    points: int = Field(0, ge=0)
    lab_id: str

class ProblemResponse(BaseModel):
    id: int
    title: str
    external_url: str
    slug: str
    difficulty: Difficulty
    points: int
    lab_id: str
    created_at: datetime

    class Config:
        from_attributes = True
