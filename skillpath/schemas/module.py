"""Pydantic schemas for modules, progress and answers."""
from datetime import datetime

from pydantic import BaseModel, Field

from skillpath.schemas.stats import AchievementOutSchema, BadgeOutSchema


class ModuleOutSchema(BaseModel):
    id: int
    title: str
    description: str
    content: str
    difficulty: str
    category: str
    estimated_duration: int
    points_reward: int
    order_index: int
    is_generated: bool
    quiz_count: int = 0
    progress_percentage: int = 0
    is_completed: bool = False
    is_read_only: bool = False


class ProgressOutSchema(BaseModel):
    module_id: int
    progress_percentage: int
    is_completed: bool
    is_read_only: bool
    answers: dict[str, str]
    started_at: datetime
    completed_at: datetime | None = None


class AnswerSubmitSchema(BaseModel):
    quiz_id: int
    question_id: str = Field(min_length=1)
    answer: str


class AnswerResultSchema(BaseModel):
    correct: bool
    points_earned: int
    progress_percentage: int
    total_points: int
    new_achievements: list[AchievementOutSchema] = []


class CompletionResultSchema(BaseModel):
    module_id: int
    score: float
    points_earned: int
    total_points: int
    badge: BadgeOutSchema | None = None
    previous_level: str
    current_level: str
    level_up: bool
    new_achievements: list[AchievementOutSchema] = []
