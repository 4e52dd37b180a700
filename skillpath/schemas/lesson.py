"""Pydantic schemas for teacher lessons."""
from datetime import datetime

from pydantic import BaseModel, Field


class LessonCreateSchema(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = ""
    lesson_type: str = "lesson"
    content_type: str = "text"
    status: str = "draft"


class LessonOutSchema(BaseModel):
    id: int
    teacher_id: int
    title: str
    content: str
    lesson_type: str
    content_type: str
    status: str
    created_at: datetime

    class Config:
        from_attributes = True
