"""Request schemas for AI content generation; camelCase keys are accepted."""
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerateModulesSchema(_CamelModel):
    current_level: str = "Beginner Level 1"
    completed_modules: int = Field(default=0, ge=0)
    student_subject: str | None = None
    student_form: str | None = None
    count: int = Field(default=3, ge=1, le=10)


class GenerateQuizzesSchema(_CamelModel):
    module_id: int
    question_count: int = Field(default=5, ge=1, le=20)


class LessonGenerateSchema(_CamelModel):
    topic: str = Field(min_length=1)
    grade: str = "Form 4"
    lang: Literal["en", "sw"] = "en"
    content_type: Literal["lesson", "academic"] = "lesson"
    lesson_type: str | None = None
    material_type: str | None = None
    quiz_type: str | None = None
    academic_format: str | None = None
    length: str | None = None


class GeneratedContentSchema(BaseModel):
    content: str
