"""Pydantic schemas for registration, login and tokens."""
from typing import Literal

from pydantic import BaseModel, Field

from skillpath.schemas.profile import ProfileOutSchema


class RegisterSchema(BaseModel):
    email: str
    password: str
    full_name: str = Field(min_length=1, max_length=255)
    role: Literal["student", "teacher"] = "student"
    skill_level: Literal["beginner", "intermediate", "advanced"] = "beginner"
    form: str | None = None
    subject: str | None = None


class LoginSchema(BaseModel):
    email: str
    password: str


class TokenOutSchema(BaseModel):
    access_token: str
    token_type: str = "bearer"
    profile: ProfileOutSchema
