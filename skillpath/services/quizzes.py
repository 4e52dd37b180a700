"""Whole-quiz attempts: scoring against the pass mark and first-pass rewards."""
import json

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillpath.models import Profile, Quiz, QuizAttempt
from skillpath.schemas.quiz import QuestionOutSchema, QuizAttemptResultSchema, QuizOutSchema
from skillpath.services import gamification
from skillpath.services.scoring import compute_quiz_score, is_passing, round_half_up

logger = structlog.get_logger(__name__)


def quiz_out(quiz: Quiz) -> QuizOutSchema:
    """Public view of a quiz; correct answers are never sent."""
    return QuizOutSchema(
        id=quiz.id,
        module_id=quiz.module_id,
        title=quiz.title,
        passing_score=quiz.passing_score,
        points_reward=quiz.points_reward,
        questions=[
            QuestionOutSchema(id=str(q["id"]), question=q["question"], options=q["options"])
            for q in quiz.questions
        ],
    )


async def has_passed(db: AsyncSession, user_id: int, quiz_id: int) -> bool:
    result = await db.execute(
        select(QuizAttempt.id)
        .where(
            QuizAttempt.user_id == user_id,
            QuizAttempt.quiz_id == quiz_id,
            QuizAttempt.passed.is_(True),
        )
        .limit(1)
    )
    return result.first() is not None


async def submit_attempt(
    db: AsyncSession,
    profile: Profile,
    quiz: Quiz,
    answers: dict[str, str],
) -> QuizAttemptResultSchema:
    """Store a scored attempt; only the first passing attempt pays the quiz reward."""
    score = round_half_up(compute_quiz_score(quiz.questions, answers))
    passed = is_passing(score, quiz.passing_score)
    already_passed = await has_passed(db, profile.user_id, quiz.id)

    attempt = QuizAttempt(
        user_id=profile.user_id,
        quiz_id=quiz.id,
        score=score,
        answers_json=json.dumps(answers),
        passed=passed,
    )
    db.add(attempt)

    points_earned = 0
    new_achievements = []
    if passed and not already_passed:
        points_earned = quiz.points_reward
        new_achievements = await gamification.award_points(db, profile, points_earned)

    gamification.touch_activity(profile)
    await db.commit()
    await db.refresh(attempt)

    logger.info(
        "quiz_attempted",
        user_id=profile.user_id,
        quiz_id=quiz.id,
        score=score,
        passed=passed,
        points_earned=points_earned,
    )
    return QuizAttemptResultSchema(
        id=attempt.id,
        quiz_id=quiz.id,
        score=score,
        passed=passed,
        attempted_at=attempt.attempted_at,
        points_earned=points_earned,
        total_points=profile.total_points,
        new_achievements=[gamification.achievement_out(a) for a in new_achievements],
    )
