"""Pydantic schemas for the skill assessment."""
from datetime import datetime

from pydantic import BaseModel


class AssessmentQuestionOutSchema(BaseModel):
    id: int
    question_text: str
    options: list[str]
    skill_area: str
    difficulty: str


class AssessmentSubmitSchema(BaseModel):
    answers: dict[int, str]


class AssessmentResultSchema(BaseModel):
    id: int
    score: int
    skill_level: str
    completed_at: datetime

    class Config:
        from_attributes = True
