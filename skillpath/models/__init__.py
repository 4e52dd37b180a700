from skillpath.models.user import User
from skillpath.models.profile import Profile
from skillpath.models.module import LearningModule
from skillpath.models.progress import ModuleProgress
from skillpath.models.quiz import Quiz
from skillpath.models.attempt import QuizAttempt
from skillpath.models.assessment import AssessmentQuestion, UserAssessment
from skillpath.models.badge import UserBadge
from skillpath.models.achievement import Achievement, UserAchievement
from skillpath.models.lesson import Lesson

__all__ = [
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
