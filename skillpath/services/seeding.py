"""Idempotent seed data: achievements, assessment questions, starter modules."""
import json

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from skillpath.models import Achievement, AssessmentQuestion, LearningModule, Quiz
from skillpath.services.scoring import calculate_points_reward

logger = structlog.get_logger(__name__)

ACHIEVEMENTS = [
    ("First Steps", "Earn your first points", "footprints", 5, "green"),
    ("Quick Learner", "Reach 50 points", "zap", 50, "blue"),
    ("Century", "Reach 100 points", "trophy", 100, "purple"),
    ("Scholar", "Reach 300 points", "graduation-cap", 300, "orange"),
    ("Master Mind", "Reach 1000 points", "crown", 1000, "gold"),
]

ASSESSMENT_QUESTIONS = [
    ("What is 12 x 8?", ["86", "96", "108", "112"], "96", "mathematics", "beginner"),
    ("Which gas do plants absorb for photosynthesis?", ["Oxygen", "Nitrogen", "Carbon dioxide", "Hydrogen"],
     "Carbon dioxide", "science", "beginner"),
    ("Solve for x: 3x + 5 = 20", ["3", "5", "7", "15"], "5", "mathematics", "intermediate"),
    ("Which word is a synonym of 'rapid'?", ["Slow", "Quick", "Late", "Calm"], "Quick", "english", "beginner"),
    ("What is the derivative of x^2?", ["x", "2x", "x^3", "2"], "2x", "mathematics", "advanced"),
    ("What is the chemical symbol for sodium?", ["S", "So", "Na", "Sd"], "Na", "science", "intermediate"),
]

STARTER_MODULES = [
    {
        "title": "Fractions Basics",
        "description": "Understand numerators, denominators and equivalent fractions.",
        "content": "A fraction describes part of a whole. The numerator counts parts, the denominator "
                   "says how many equal parts make the whole.",
        "difficulty": "beginner",
        "category": "mathematics",
        "estimated_duration": 30,
        "quiz": [
            ("What is the numerator of 3/4?", ["3", "4", "7", "1"], "3"),
            ("Which fraction equals 1/2?", ["2/3", "3/6", "1/3", "4/6"], "3/6"),
        ],
    },
    {
        "title": "Cells and Organisms",
        "description": "The cell as the basic unit of life.",
        "content": "All living things are made of cells. Plant cells have a cell wall and chloroplasts; "
                   "animal cells do not.",
        "difficulty": "intermediate",
        "category": "science",
        "estimated_duration": 45,
        "quiz": [
            ("Which structure is found in plant cells but not animal cells?",
             ["Nucleus", "Cell membrane", "Chloroplast", "Mitochondrion"], "Chloroplast"),
            ("What is the basic unit of life?", ["Atom", "Cell", "Tissue", "Organ"], "Cell"),
        ],
    },
    {
        "title": "Reading Strategies",
        "description": "Skimming, scanning and summarising texts.",
        "content": "Skim to get the main idea, scan to find specific facts, and summarise in your own words.",
        "difficulty": "beginner",
        "category": "english",
        "estimated_duration": 20,
        "quiz": [],
    },
]


async def _is_empty(db: AsyncSession, model) -> bool:
    return not await db.scalar(select(func.count()).select_from(model))


async def seed_achievements(db: AsyncSession) -> int:
    if not await _is_empty(db, Achievement):
        return 0
    for title, description, icon, points, color in ACHIEVEMENTS:
        db.add(Achievement(title=title, description=description, icon=icon,
                           points_required=points, badge_color=color))
    await db.commit()
    return len(ACHIEVEMENTS)


async def seed_assessment_questions(db: AsyncSession) -> int:
    if not await _is_empty(db, AssessmentQuestion):
        return 0
    for text, options, answer, area, difficulty in ASSESSMENT_QUESTIONS:
        db.add(AssessmentQuestion(question_text=text, options_json=json.dumps(options),
                                  correct_answer=answer, skill_area=area, difficulty=difficulty))
    await db.commit()
    return len(ASSESSMENT_QUESTIONS)


async def seed_modules(db: AsyncSession) -> int:
    if not await _is_empty(db, LearningModule):
        return 0
    for order_index, entry in enumerate(STARTER_MODULES, start=1):
        module = LearningModule(
            title=entry["title"],
            description=entry["description"],
            content=entry["content"],
            difficulty=entry["difficulty"],
            category=entry["category"],
            estimated_duration=entry["estimated_duration"],
            points_reward=calculate_points_reward(entry["estimated_duration"], entry["difficulty"]),
            order_index=order_index,
        )
        db.add(module)
        if entry["quiz"]:
            await db.flush()
            quiz = Quiz(module_id=module.id, title=f"{entry['title']} Quiz")
            quiz.questions = [
                {"id": f"q{i}", "question": q, "options": options, "correct_answer": answer}
                for i, (q, options, answer) in enumerate(entry["quiz"], start=1)
            ]
            db.add(quiz)
    await db.commit()
    return len(STARTER_MODULES)


async def seed_all(db: AsyncSession) -> None:
    counts = {
        "achievements": await seed_achievements(db),
        "assessment_questions": await seed_assessment_questions(db),
        "modules": await seed_modules(db),
    }
    logger.info("seed_complete", **counts)
