"""Quiz routes: whole-quiz attempts and attempt history."""
from fastapi import APIRouter, HTTPException
from sqlalchemy import select

from skillpath.models.attempt import QuizAttempt
from skillpath.models.quiz import Quiz
from skillpath.routers.deps import CurrentProfile, DbSession
from skillpath.schemas.quiz import QuizAttemptOutSchema, QuizAttemptResultSchema, QuizOutSchema, QuizSubmitSchema
from skillpath.services.progress import get_visible_module
from skillpath.services.quizzes import quiz_out, submit_attempt

router = APIRouter(prefix="/api/quizzes", tags=["quizzes"])


async def _get_quiz(db, profile, quiz_id: int) -> Quiz:
    quiz = await db.get(Quiz, quiz_id)
    if quiz is None:
        raise HTTPException(status_code=404, detail="Quiz not found")
    # quizzes of another user's generated module are hidden
    await get_visible_module(db, profile.user_id, quiz.module_id)
    return quiz


@router.get("/{quiz_id}", response_model=QuizOutSchema)
async def get_quiz(quiz_id: int, profile: CurrentProfile, db: DbSession):
    return quiz_out(await _get_quiz(db, profile, quiz_id))


@router.post("/{quiz_id}/attempts", response_model=QuizAttemptResultSchema, status_code=201)
async def attempt_quiz(quiz_id: int, body: QuizSubmitSchema, profile: CurrentProfile, db: DbSession):
    """Score a full set of answers against the quiz's passing score."""
    quiz = await _get_quiz(db, profile, quiz_id)
    return await submit_attempt(db, profile, quiz, body.answers)


@router.get("/{quiz_id}/attempts", response_model=list[QuizAttemptOutSchema])
async def list_attempts(quiz_id: int, profile: CurrentProfile, db: DbSession):
    quiz = await _get_quiz(db, profile, quiz_id)
    result = await db.execute(
        select(QuizAttempt)
        .where(QuizAttempt.user_id == profile.user_id, QuizAttempt.quiz_id == quiz.id)
        .order_by(QuizAttempt.attempted_at.desc(), QuizAttempt.id.desc())
    )
    return result.scalars().all()
