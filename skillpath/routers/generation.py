"""AI generation routes for student modules and quizzes."""
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select

from skillpath.core.errors import ConflictError, PermissionDenied
from skillpath.models.module import LearningModule
from skillpath.models.progress import ModuleProgress
from skillpath.models.quiz import Quiz
from skillpath.routers.deps import DbSession, StudentProfile
from skillpath.routers.modules import list_modules
from skillpath.schemas.generation import GenerateModulesSchema, GenerateQuizzesSchema
from skillpath.schemas.module import ModuleOutSchema
from skillpath.schemas.quiz import QuizOutSchema
from skillpath.services.generation import ContentGenerator, get_content_generator
from skillpath.services.progress import get_module_quizzes, get_visible_module
from skillpath.services.quizzes import quiz_out

router = APIRouter(prefix="/api", tags=["generation"])
logger = structlog.get_logger(__name__)

Generator = Annotated[ContentGenerator, Depends(get_content_generator)]


@router.post("/generateModules", response_model=list[ModuleOutSchema], status_code=status.HTTP_201_CREATED)
async def generate_modules(body: GenerateModulesSchema, profile: StudentProfile, db: DbSession, generator: Generator):
    """Generate modules for the caller's level; titles the caller already has are skipped."""
    generated = await run_in_threadpool(
        generator.generate_modules,
        body,
        subject=body.student_subject or profile.subject,
        form=body.student_form or profile.form,
    )

    result = await db.execute(select(LearningModule.title).where(LearningModule.owner_id == profile.user_id))
    existing = {t.lower() for t in result.scalars().all()}
    fresh = []
    for item in generated:
        if item["title"].lower() in existing:
            continue
        existing.add(item["title"].lower())
        fresh.append(item)
    if not fresh:
        raise ConflictError("Modules already exist")

    for item in fresh:
        module = LearningModule(owner_id=profile.user_id, **item)
        db.add(module)
        await db.flush()
        db.add(ModuleProgress(user_id=profile.user_id, module_id=module.id))
    await db.commit()

    logger.info("modules_generated", user_id=profile.user_id, count=len(fresh))
    titles = {item["title"] for item in fresh}
    return [m for m in await list_modules(profile, db) if m.is_generated and m.title in titles]


@router.post("/generateQuizzes", response_model=QuizOutSchema, status_code=status.HTTP_201_CREATED)
async def generate_quizzes(body: GenerateQuizzesSchema, profile: StudentProfile, db: DbSession, generator: Generator):
    """Generate and store the quiz of one of the caller's generated modules."""
    module = await get_visible_module(db, profile.user_id, body.module_id)
    # catalog quizzes are shared by every student
    if module.owner_id != profile.user_id:
        raise PermissionDenied("Quizzes can only be generated for your own modules")
    if await get_module_quizzes(db, module.id):
        raise ConflictError("Module already has a quiz")

    questions = await run_in_threadpool(
        generator.generate_questions,
        module.title,
        module.content or module.description,
        module.difficulty,
        profile.subject,
        body.question_count,
    )

    quiz = Quiz(module_id=module.id, title=f"{module.title} Quiz")
    quiz.questions = questions
    db.add(quiz)
    await db.commit()
    await db.refresh(quiz)

    logger.info("quiz_generated", user_id=profile.user_id, module_id=module.id, questions=len(questions))
    return quiz_out(quiz)
