"""Module progress bookkeeping: answers, completion, reset."""
import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from skillpath.core.errors import ConflictError, NotFoundError
from skillpath.models import LearningModule, ModuleProgress, Profile, Quiz
from skillpath.models._time import utcnow
from skillpath.schemas.module import AnswerResultSchema, CompletionResultSchema
from skillpath.schemas.stats import BadgeOutSchema
from skillpath.services import gamification
from skillpath.services.scoring import (
    QUESTION_POINTS,
    compute_level,
    compute_quiz_score,
    earns_badge,
    effective_points_reward,
    is_correct,
    level_label,
    progress_percentage,
)

logger = structlog.get_logger(__name__)


def question_key(quiz_id: int, question_id) -> str:
    """Answers are keyed per quiz so question ids may repeat across quizzes."""
    return f"{quiz_id}:{question_id}"


def flatten_questions(quizzes: list[Quiz]) -> list[dict]:
    """All questions of a module with ids rewritten to question keys."""
    return [
        {**q, "id": question_key(quiz.id, q["id"])}
        for quiz in quizzes
        for q in quiz.questions
    ]


async def get_visible_module(db: AsyncSession, user_id: int, module_id: int) -> LearningModule:
    module = await db.get(LearningModule, module_id)
    if module is None or not module.visible_to(user_id):
        raise NotFoundError("Module not found")
    return module


async def get_module_quizzes(db: AsyncSession, module_id: int) -> list[Quiz]:
    result = await db.execute(select(Quiz).where(Quiz.module_id == module_id).order_by(Quiz.id))
    return list(result.scalars().all())


async def find_progress(db: AsyncSession, user_id: int, module_id: int) -> ModuleProgress | None:
    result = await db.execute(
        select(ModuleProgress).where(
            ModuleProgress.user_id == user_id,
            ModuleProgress.module_id == module_id,
        )
    )
    return result.scalar_one_or_none()


async def get_or_create_progress(db: AsyncSession, user_id: int, module_id: int) -> ModuleProgress:
    progress = await find_progress(db, user_id, module_id)
    if progress is not None:
        return progress

    progress = ModuleProgress(user_id=user_id, module_id=module_id)
    try:
        async with db.begin_nested():
            db.add(progress)
    except IntegrityError:
        # a concurrent request inserted the row first
        logger.info("progress_insert_raced", user_id=user_id, module_id=module_id)
        progress = await find_progress(db, user_id, module_id)
    return progress


async def record_answer(
    db: AsyncSession,
    profile: Profile,
    module: LearningModule,
    quiz_id: int,
    question_id: str,
    answer: str,
) -> AnswerResultSchema:
    """Check one answer; a newly correct question earns points and moves the percentage."""
    progress = await get_or_create_progress(db, profile.user_id, module.id)
    if progress.is_completed or progress.is_read_only:
        raise ConflictError("Module is completed and read-only")

    quizzes = await get_module_quizzes(db, module.id)
    quiz = next((q for q in quizzes if q.id == quiz_id), None)
    if quiz is None:
        raise NotFoundError("Quiz not found in this module")
    question = next((q for q in quiz.questions if str(q["id"]) == str(question_id)), None)
    if question is None:
        raise NotFoundError("Question not found")

    key = question_key(quiz.id, question["id"])
    answers = progress.answers
    answers[key] = answer
    progress.answers = answers

    correct = is_correct(question, answer)
    points_earned = 0
    new_achievements = []
    rewarded = progress.correct_question_ids
    if correct and key not in rewarded:
        rewarded.append(key)
        progress.correct_question_ids = rewarded
        points_earned = QUESTION_POINTS
        new_achievements = await gamification.award_points(db, profile, points_earned)

    questions = flatten_questions(quizzes)
    correct_now = sum(1 for q in questions if is_correct(q, answers.get(q["id"])))
    progress.progress_percentage = progress_percentage(correct_now, len(questions))
    gamification.touch_activity(profile)
    await db.commit()

    logger.info(
        "answer_recorded",
        user_id=profile.user_id,
        module_id=module.id,
        question=key,
        correct=correct,
        points_earned=points_earned,
    )
    return AnswerResultSchema(
        correct=correct,
        points_earned=points_earned,
        progress_percentage=progress.progress_percentage,
        total_points=profile.total_points,
        new_achievements=[gamification.achievement_out(a) for a in new_achievements],
    )


async def complete_module(db: AsyncSession, profile: Profile, module: LearningModule) -> CompletionResultSchema:
    """Score the stored answers, lock the module and pay out points and badge."""
    progress = await get_or_create_progress(db, profile.user_id, module.id)
    if progress.is_completed:
        raise ConflictError("Module already completed")

    questions = flatten_questions(await get_module_quizzes(db, module.id))
    # reading-only modules have nothing to get wrong
    score = compute_quiz_score(questions, progress.answers) if questions else 100.0
    previous_level = level_label(compute_level(profile.total_points))

    progress.progress_percentage = 100
    progress.is_completed = True
    progress.is_read_only = True
    progress.completed_at = utcnow()

    points_earned = 0
    new_achievements = []
    if not progress.points_awarded:
        points_earned = effective_points_reward(module)
        progress.points_awarded = True
        new_achievements = await gamification.award_points(db, profile, points_earned)

    badge = None
    if earns_badge(score):
        badge = await gamification.award_module_badge(db, profile.user_id, module)

    gamification.touch_activity(profile)
    await db.commit()

    current_level = level_label(compute_level(profile.total_points))
    logger.info(
        "module_completed",
        user_id=profile.user_id,
        module_id=module.id,
        score=round(score, 1),
        points_earned=points_earned,
        badge=badge.name if badge else None,
    )
    return CompletionResultSchema(
        module_id=module.id,
        score=round(score, 1),
        points_earned=points_earned,
        total_points=profile.total_points,
        badge=BadgeOutSchema.model_validate(badge) if badge else None,
        previous_level=previous_level,
        current_level=current_level,
        level_up=previous_level != current_level,
        new_achievements=[gamification.achievement_out(a) for a in new_achievements],
    )


async def reset_module(db: AsyncSession, user_id: int, module: LearningModule) -> ModuleProgress:
    """Reopen a module for a retake; points and badges already earned stay."""
    progress = await get_or_create_progress(db, user_id, module.id)
    progress.progress_percentage = 0
    progress.is_completed = False
    progress.is_read_only = False
    progress.completed_at = None
    # rewarded question keys are kept
    progress.answers = {}
    await db.commit()
    logger.info("module_reset", user_id=user_id, module_id=module.id)
    return progress
