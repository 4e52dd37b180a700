"""Pydantic schemas for profiles."""
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class ProfileOutSchema(BaseModel):
    user_id: int
    full_name: str
    email: str
    role: str
    skill_level: str
    form: str | None = None
    subject: str | None = None
    total_points: int
    streak_days: int
    last_active_date: date | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProfileUpdateSchema(BaseModel):
    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    skill_level: Literal["beginner", "intermediate", "advanced"] | None = None
    form: str | None = None
    subject: str | None = None

    @field_validator("full_name", "skill_level", mode="before")
    @classmethod
    def not_null(cls, value):
        # form and subject may be cleared, these columns may not
        if value is None:
            raise ValueError("may not be null")
        return value
