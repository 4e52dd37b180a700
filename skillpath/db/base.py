"""SQLAlchemy declarative base and model imports for Alembic."""
from skillpath.db.session import Base

# Import all models so Alembic can see them
from skillpath.models import (  # noqa: F401
    Achievement,
    AssessmentQuestion,
    LearningModule,
    Lesson,
    ModuleProgress,
    Profile,
    Quiz,
    QuizAttempt,
    User,
    UserAchievement,
    UserAssessment,
    UserBadge,
)

__all__ = [
    "Base",
    "User",
    "Profile",
    "LearningModule",
    "ModuleProgress",
    "Quiz",
    "QuizAttempt",
    "AssessmentQuestion",
    "UserAssessment",
    "UserBadge",
    "Achievement",
    "UserAchievement",
    "Lesson",
]
