"""Skill assessment: score answers and set the profile's skill level."""
import json

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from skillpath.core.errors import InvalidInputError
from skillpath.models import AssessmentQuestion, Profile, UserAssessment
from skillpath.services.scoring import classify_skill_level, round_half_up

logger = structlog.get_logger(__name__)


async def submit_assessment(db: AsyncSession, profile: Profile, answers: dict[int, str]) -> UserAssessment:
    if not answers:
        raise InvalidInputError("No answers submitted")

    result = await db.execute(select(AssessmentQuestion).where(AssessmentQuestion.id.in_(list(answers))))
    questions = {q.id: q for q in result.scalars().all()}
    unknown = sorted(set(answers) - set(questions))
    if unknown:
        raise InvalidInputError(f"Unknown assessment questions: {unknown}")

    question_count = await db.scalar(select(func.count(AssessmentQuestion.id)))
    correct = sum(1 for qid, answer in answers.items() if questions[qid].correct_answer == answer)
    # unanswered questions count as wrong
    score = round_half_up(correct / question_count * 100) if question_count else 0
    skill_level = classify_skill_level(score)

    assessment = UserAssessment(
        user_id=profile.user_id,
        answers_json=json.dumps({str(k): v for k, v in answers.items()}),
        score=score,
        skill_level=skill_level,
    )
    db.add(assessment)
    profile.skill_level = skill_level
    await db.commit()
    await db.refresh(assessment)

    logger.info("assessment_completed", user_id=profile.user_id, score=score, skill_level=skill_level)
    return assessment
