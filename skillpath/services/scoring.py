"""Points, quiz scores, levels, badges and streaks. Pure functions, no DB access."""
import math
from datetime import date, timedelta

# Points: +5 per newly correct question; module reward paid once on completion
QUESTION_POINTS = 5
BADGE_SCORE_THRESHOLD = 85
DEFAULT_PASSING_SCORE = 70
MIN_MODULE_POINTS = 5

POINTS_PER_LEVEL = 100
LEVELS_PER_TIER = 3
MODULES_PER_LEVEL = 3
LEVEL_TIERS = ["Beginner", "Intermediate", "Advanced"]

DIFFICULTY_MULTIPLIER = {
    "beginner": 1,
    "intermediate": 1.5,
    "advanced": 2,
}

# Assessment score (0-100) lower bounds per skill level, highest first
SKILL_BANDS = [
    (80, "advanced"),
    (50, "intermediate"),
    (0, "beginner"),
]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_points_reward(duration: int, difficulty: str) -> int:
    """Reward for a module from its duration (minutes) and difficulty, in steps of 5."""
    base_points = round_half_up((duration or 0) / 10)
    multiplier = DIFFICULTY_MULTIPLIER.get((difficulty or "").lower(), 1)
    calculated = round_half_up(base_points * multiplier)
    return max(MIN_MODULE_POINTS, round_half_up(calculated / 5) * 5)


def effective_points_reward(module) -> int:
    """Stored reward when set, otherwise the computed one."""
    if module.points_reward and module.points_reward > 0:
        return module.points_reward
    return calculate_points_reward(module.estimated_duration, module.difficulty)


def is_correct(question: dict, answer: str | None) -> bool:
    return answer is not None and answer == question.get("correct_answer")


def compute_quiz_score(questions: list[dict], answers: dict[str, str]) -> float:
    """Percentage (0-100) of questions answered correctly; 0 for an empty quiz."""
    if not questions:
        return 0.0
    correct = sum(1 for q in questions if is_correct(q, answers.get(str(q["id"]))))
    return correct / len(questions) * 100


def progress_percentage(correct_count: int, total: int) -> int:
    if total <= 0:
        return 0
    return min(int(correct_count / total * 100), 100)


def is_passing(score: float, threshold: int) -> bool:
    return score >= threshold


def earns_badge(score: float) -> bool:
    return score >= BADGE_SCORE_THRESHOLD


def compute_level(total_points: int) -> int:
    """Level number (1-based) from total points."""
    return max(total_points, 0) // POINTS_PER_LEVEL + 1


def level_label(level: int) -> str:
    """E.g. 1 -> 'Beginner Level 1', 4 -> 'Intermediate Level 1', 8 -> 'Advanced Level 2'."""
    tier_index = min((level - 1) // LEVELS_PER_TIER, len(LEVEL_TIERS) - 1)
    within = level - tier_index * LEVELS_PER_TIER
    return f"{LEVEL_TIERS[tier_index]} Level {within}"


def next_level_points(total_points: int) -> int:
    """Total points at which the next level starts."""
    return compute_level(total_points) * POINTS_PER_LEVEL


def module_level(completed_modules: int) -> int:
    """Content level for generated modules: one step per three completed modules."""
    return max(completed_modules, 0) // MODULES_PER_LEVEL + 1


def modules_needed_for_next_level(completed_modules: int) -> int:
    return module_level(completed_modules) * MODULES_PER_LEVEL


def badge_for_module(module) -> dict:
    difficulty = (module.difficulty or "beginner").strip()
    return {
        "name": f"{difficulty[:1].upper()}{difficulty[1:]} Badge",
        "description": f"Completed {module.title}",
        "icon": "star",
    }


def classify_skill_level(score: float) -> str:
    for lower, level in SKILL_BANDS:
        if score >= lower:
            return level
    return "beginner"


def advance_streak(last_active: date | None, streak: int, today: date) -> int:
    """Streak after activity on `today`: unchanged same day, +1 after yesterday, else restart at 1."""
    if last_active == today:
        return max(streak, 1)
    if last_active == today - timedelta(days=1):
        return streak + 1
    return 1
