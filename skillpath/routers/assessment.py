"""Skill assessment routes."""
from fastapi import APIRouter
from sqlalchemy import select

from skillpath.models.assessment import AssessmentQuestion, UserAssessment
from skillpath.routers.deps import CurrentProfile, DbSession
from skillpath.schemas.assessment import (
    AssessmentQuestionOutSchema,
    AssessmentResultSchema,
    AssessmentSubmitSchema,
)
from skillpath.services.assessment import submit_assessment

router = APIRouter(prefix="/api/assessment", tags=["assessment"])


@router.get("/questions", response_model=list[AssessmentQuestionOutSchema])
async def list_questions(profile: CurrentProfile, db: DbSession):
    """Assessment questions without their answers."""
    result = await db.execute(select(AssessmentQuestion).order_by(AssessmentQuestion.id))
    return [
        AssessmentQuestionOutSchema(
            id=q.id,
            question_text=q.question_text,
            options=q.options,
            skill_area=q.skill_area,
            difficulty=q.difficulty,
        )
        for q in result.scalars().all()
    ]


@router.post("", response_model=AssessmentResultSchema, status_code=201)
async def submit(body: AssessmentSubmitSchema, profile: CurrentProfile, db: DbSession):
    return await submit_assessment(db, profile, body.answers)


@router.get("/history", response_model=list[AssessmentResultSchema])
async def history(profile: CurrentProfile, db: DbSession):
    result = await db.execute(
        select(UserAssessment)
        .where(UserAssessment.user_id == profile.user_id)
        .order_by(UserAssessment.completed_at.desc(), UserAssessment.id.desc())
    )
    return result.scalars().all()
