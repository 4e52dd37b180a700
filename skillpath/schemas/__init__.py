from skillpath.schemas.auth import LoginSchema, RegisterSchema, TokenOutSchema
from skillpath.schemas.module import (
    AnswerResultSchema,
    AnswerSubmitSchema,
    CompletionResultSchema,
    ModuleOutSchema,
    ProgressOutSchema,
)
from skillpath.schemas.profile import ProfileOutSchema, ProfileUpdateSchema
from skillpath.schemas.quiz import QuizAttemptResultSchema, QuizOutSchema, QuizSubmitSchema
from skillpath.schemas.stats import (
    AchievementOutSchema,
    BadgeOutSchema,
    LeaderboardEntrySchema,
    LevelOutSchema,
)

__all__ = [
    "AchievementOutSchema",
    "AnswerResultSchema",
    "AnswerSubmitSchema",
    "BadgeOutSchema",
    "CompletionResultSchema",
    "LeaderboardEntrySchema",
    "LevelOutSchema",
    "LoginSchema",
    "ModuleOutSchema",
    "ProfileOutSchema",
    "ProfileUpdateSchema",
    "ProgressOutSchema",
    "QuizAttemptResultSchema",
    "QuizOutSchema",
    "QuizSubmitSchema",
    "RegisterSchema",
    "TokenOutSchema",
]
