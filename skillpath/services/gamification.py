"""Points, streaks, achievements, badges and level/leaderboard aggregates.

Every function here works inside the caller's session and leaves the commit to
the caller, so one request's bookkeeping lands in a single transaction.
"""
from datetime import date

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from skillpath.models import (
    Achievement,
    LearningModule,
    ModuleProgress,
    Profile,
    UserAchievement,
    UserBadge,
)
from skillpath.models._time import utcnow, utctoday
from skillpath.schemas.stats import AchievementOutSchema, LeaderboardEntrySchema, LevelOutSchema
from skillpath.services.scoring import (
    advance_streak,
    badge_for_module,
    compute_level,
    effective_points_reward,
    level_label,
    modules_needed_for_next_level,
    next_level_points,
)

logger = structlog.get_logger(__name__)


def touch_activity(profile: Profile, today: date | None = None) -> int:
    """Advance the daily streak for activity today; returns the new streak."""
    today = today or utctoday()
    profile.streak_days = advance_streak(profile.last_active_date, profile.streak_days or 0, today)
    profile.last_active_date = today
    return profile.streak_days


async def unlock_achievements(db: AsyncSession, profile: Profile) -> list[Achievement]:
    """Grant every achievement the profile's points now qualify for, once."""
    earned_ids = select(UserAchievement.achievement_id).where(UserAchievement.user_id == profile.user_id)
    result = await db.execute(
        select(Achievement)
        .where(
            Achievement.points_required <= profile.total_points,
            Achievement.id.not_in(earned_ids),
        )
        .order_by(Achievement.points_required, Achievement.id)
    )
    unlocked = list(result.scalars().all())
    for achievement in unlocked:
        db.add(UserAchievement(user_id=profile.user_id, achievement_id=achievement.id))
        logger.info("achievement_unlocked", user_id=profile.user_id, achievement=achievement.title)
    return unlocked


async def award_points(db: AsyncSession, profile: Profile, points: int) -> list[Achievement]:
    """Add points (never subtracts) and return newly unlocked achievements."""
    if points <= 0:
        return []
    profile.total_points = (profile.total_points or 0) + points
    return await unlock_achievements(db, profile)


async def award_module_badge(db: AsyncSession, user_id: int, module: LearningModule) -> UserBadge | None:
    """Create the module badge unless the user already holds it."""
    result = await db.execute(
        select(UserBadge).where(UserBadge.user_id == user_id, UserBadge.module_id == module.id)
    )
    if result.scalar_one_or_none() is not None:
        return None

    badge = UserBadge(user_id=user_id, module_id=module.id, earned_at=utcnow(), **badge_for_module(module))
    db.add(badge)
    await db.flush()
    logger.info("badge_awarded", user_id=user_id, module_id=module.id, badge=badge.name)
    return badge


def achievement_out(achievement: Achievement, earned_at=None, earned: bool = True) -> AchievementOutSchema:
    return AchievementOutSchema(
        id=achievement.id,
        title=achievement.title,
        description=achievement.description,
        icon=achievement.icon,
        points_required=achievement.points_required,
        badge_color=achievement.badge_color,
        earned=earned,
        earned_at=earned_at,
    )


async def list_achievements(db: AsyncSession, user_id: int) -> list[AchievementOutSchema]:
    result = await db.execute(
        select(Achievement, UserAchievement.earned_at)
        .outerjoin(
            UserAchievement,
            (UserAchievement.achievement_id == Achievement.id) & (UserAchievement.user_id == user_id),
        )
        .order_by(Achievement.points_required, Achievement.id)
    )
    return [
        achievement_out(achievement, earned_at=earned_at, earned=earned_at is not None)
        for achievement, earned_at in result.all()
    ]


async def level_summary(db: AsyncSession, profile: Profile) -> LevelOutSchema:
    badges_count = await db.scalar(
        select(func.count(UserBadge.id)).where(UserBadge.user_id == profile.user_id)
    )
    result = await db.execute(
        select(LearningModule)
        .join(ModuleProgress, ModuleProgress.module_id == LearningModule.id)
        .where(ModuleProgress.user_id == profile.user_id, ModuleProgress.is_completed.is_(True))
    )
    completed = result.scalars().all()
    points_sum = sum(effective_points_reward(m) for m in completed)

    level = compute_level(profile.total_points)
    return LevelOutSchema(
        user_id=profile.user_id,
        total_score=profile.total_points,
        level=level,
        current_level=level_label(level),
        next_level_points=next_level_points(profile.total_points),
        badges_count=badges_count or 0,
        points_sum=points_sum,
        completed_modules=len(completed),
        total_modules_needed=modules_needed_for_next_level(len(completed)),
        next_level=level_label(level + 1),
        streak_days=profile.streak_days,
        updated_at=profile.updated_at,
    )


async def leaderboard(db: AsyncSession, limit: int) -> list[LeaderboardEntrySchema]:
    result = await db.execute(
        select(Profile)
        .where(Profile.role == "student")
        .order_by(Profile.total_points.desc(), Profile.created_at.asc(), Profile.user_id.asc())
        .limit(limit)
    )
    return [
        LeaderboardEntrySchema(
            rank=rank,
            user_id=p.user_id,
            full_name=p.full_name,
            total_score=p.total_points,
            level=compute_level(p.total_points),
        )
        for rank, p in enumerate(result.scalars().all(), start=1)
    ]
