"""Module routes: catalog with progress, start, answer, complete, reset, quizzes."""
from fastapi import APIRouter
from sqlalchemy import func, or_, select

from skillpath.models.module import LearningModule
from skillpath.models.progress import ModuleProgress
from skillpath.models.quiz import Quiz
from skillpath.routers.deps import CurrentProfile, DbSession
from skillpath.schemas.module import (
    AnswerResultSchema,
    AnswerSubmitSchema,
    CompletionResultSchema,
    ModuleOutSchema,
    ProgressOutSchema,
)
from skillpath.schemas.quiz import QuizOutSchema
from skillpath.services import progress as progress_service
from skillpath.services.quizzes import quiz_out
from skillpath.services.scoring import effective_points_reward

router = APIRouter(prefix="/api/modules", tags=["modules"])


def _module_out(module: LearningModule, progress: ModuleProgress | None, quiz_count: int) -> ModuleOutSchema:
    return ModuleOutSchema(
        id=module.id,
        title=module.title,
        description=module.description,
        content=module.content,
        difficulty=module.difficulty,
        category=module.category,
        estimated_duration=module.estimated_duration,
        points_reward=effective_points_reward(module),
        order_index=module.order_index,
        is_generated=module.owner_id is not None,
        quiz_count=quiz_count,
        progress_percentage=progress.progress_percentage if progress else 0,
        is_completed=progress.is_completed if progress else False,
        is_read_only=progress.is_read_only if progress else False,
    )


def _progress_out(progress: ModuleProgress) -> ProgressOutSchema:
    return ProgressOutSchema(
        module_id=progress.module_id,
        progress_percentage=progress.progress_percentage,
        is_completed=progress.is_completed,
        is_read_only=progress.is_read_only,
        answers=progress.answers,
        started_at=progress.started_at,
        completed_at=progress.completed_at,
    )


async def _quiz_count(db, module_id: int) -> int:
    return await db.scalar(select(func.count(Quiz.id)).where(Quiz.module_id == module_id)) or 0


@router.get("", response_model=list[ModuleOutSchema])
async def list_modules(profile: CurrentProfile, db: DbSession):
    """Shared catalog plus the caller's generated modules, with the caller's progress."""
    result = await db.execute(
        select(LearningModule, ModuleProgress)
        .outerjoin(
            ModuleProgress,
            (ModuleProgress.module_id == LearningModule.id) & (ModuleProgress.user_id == profile.user_id),
        )
        .where(or_(LearningModule.owner_id.is_(None), LearningModule.owner_id == profile.user_id))
        .order_by(LearningModule.order_index, LearningModule.id)
    )
    rows = result.all()

    counts_result = await db.execute(select(Quiz.module_id, func.count(Quiz.id)).group_by(Quiz.module_id))
    quiz_counts = dict(counts_result.all())
    return [_module_out(m, p, quiz_counts.get(m.id, 0)) for m, p in rows]


@router.get("/{module_id}", response_model=ModuleOutSchema)
async def get_module(module_id: int, profile: CurrentProfile, db: DbSession):
    module = await progress_service.get_visible_module(db, profile.user_id, module_id)
    progress = await progress_service.find_progress(db, profile.user_id, module.id)
    return _module_out(module, progress, await _quiz_count(db, module.id))


@router.get("/{module_id}/progress", response_model=ProgressOutSchema)
async def get_progress(module_id: int, profile: CurrentProfile, db: DbSession):
    module = await progress_service.get_visible_module(db, profile.user_id, module_id)
    progress = await progress_service.get_or_create_progress(db, profile.user_id, module.id)
    await db.commit()
    return _progress_out(progress)


@router.post("/{module_id}/start", response_model=ProgressOutSchema)
async def start_module(module_id: int, profile: CurrentProfile, db: DbSession):
    """Create the caller's progress row if missing; safe to repeat."""
    module = await progress_service.get_visible_module(db, profile.user_id, module_id)
    progress = await progress_service.get_or_create_progress(db, profile.user_id, module.id)
    await db.commit()
    return _progress_out(progress)


@router.post("/{module_id}/answer", response_model=AnswerResultSchema)
async def answer_question(module_id: int, body: AnswerSubmitSchema, profile: CurrentProfile, db: DbSession):
    module = await progress_service.get_visible_module(db, profile.user_id, module_id)
    return await progress_service.record_answer(
        db, profile, module, body.quiz_id, body.question_id, body.answer
    )


@router.post("/{module_id}/complete", response_model=CompletionResultSchema)
async def complete_module(module_id: int, profile: CurrentProfile, db: DbSession):
    module = await progress_service.get_visible_module(db, profile.user_id, module_id)
    return await progress_service.complete_module(db, profile, module)


@router.post("/{module_id}/reset", response_model=ProgressOutSchema)
async def reset_module(module_id: int, profile: CurrentProfile, db: DbSession):
    module = await progress_service.get_visible_module(db, profile.user_id, module_id)
    progress = await progress_service.reset_module(db, profile.user_id, module)
    return _progress_out(progress)


@router.get("/{module_id}/quizzes", response_model=list[QuizOutSchema])
async def list_module_quizzes(module_id: int, profile: CurrentProfile, db: DbSession):
    module = await progress_service.get_visible_module(db, profile.user_id, module_id)
    return [quiz_out(q) for q in await progress_service.get_module_quizzes(db, module.id)]
