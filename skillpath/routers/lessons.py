"""Teacher lesson routes: list, create, delete and AI drafting."""
import structlog
from fastapi import APIRouter, HTTPException, Response, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select

from skillpath.models.lesson import Lesson
from skillpath.routers.deps import DbSession, TeacherProfile
from skillpath.routers.generation import Generator
from skillpath.schemas.generation import GeneratedContentSchema, LessonGenerateSchema
from skillpath.schemas.lesson import LessonCreateSchema, LessonOutSchema

router = APIRouter(prefix="/api/lessons", tags=["lessons"])
logger = structlog.get_logger(__name__)


@router.get("", response_model=list[LessonOutSchema])
async def list_lessons(profile: TeacherProfile, db: DbSession):
    result = await db.execute(
        select(Lesson)
        .where(Lesson.teacher_id == profile.user_id)
        .order_by(Lesson.created_at.desc(), Lesson.id.desc())
    )
    return result.scalars().all()


@router.post("", response_model=LessonOutSchema, status_code=status.HTTP_201_CREATED)
async def create_lesson(body: LessonCreateSchema, profile: TeacherProfile, db: DbSession):
    lesson = Lesson(teacher_id=profile.user_id, **body.model_dump())
    db.add(lesson)
    await db.commit()
    await db.refresh(lesson)
    logger.info("lesson_created", teacher_id=profile.user_id, lesson_id=lesson.id)
    return lesson


@router.delete("/{lesson_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_lesson(lesson_id: int, profile: TeacherProfile, db: DbSession):
    lesson = await db.get(Lesson, lesson_id)
    if lesson is None or lesson.teacher_id != profile.user_id:
        raise HTTPException(status_code=404, detail="Lesson not found")
    await db.delete(lesson)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/generate", response_model=GeneratedContentSchema)
async def generate_lesson(body: LessonGenerateSchema, profile: TeacherProfile, generator: Generator):
    """Draft lesson text; nothing is stored until the teacher saves it."""
    content = await run_in_threadpool(generator.generate_lesson, body)
    logger.info("lesson_generated", teacher_id=profile.user_id, topic=body.topic)
    return GeneratedContentSchema(content=content)
