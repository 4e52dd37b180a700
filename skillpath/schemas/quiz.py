"""Pydantic schemas for quizzes and attempts."""
from datetime import datetime

from pydantic import BaseModel

from skillpath.schemas.stats import AchievementOutSchema


class QuestionOutSchema(BaseModel):
    id: str
    question: str
    options: list[str]


class QuizOutSchema(BaseModel):
    id: int
    module_id: int
    title: str
    passing_score: int
    points_reward: int
    questions: list[QuestionOutSchema]


class QuizSubmitSchema(BaseModel):
    answers: dict[str, str]


class QuizAttemptOutSchema(BaseModel):
    id: int
    quiz_id: int
    score: int
    passed: bool
    attempted_at: datetime

    class Config:
        from_attributes = True


class QuizAttemptResultSchema(QuizAttemptOutSchema):
    points_earned: int = 0
    total_points: int = 0
    new_achievements: list[AchievementOutSchema] = []
