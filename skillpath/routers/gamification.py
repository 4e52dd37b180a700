"""Levels, badges, achievements and leaderboard."""
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query
from sqlalchemy import select

from skillpath.core.config import get_settings
from skillpath.models.badge import UserBadge
from skillpath.models.profile import Profile
from skillpath.routers.deps import CurrentProfile, DbSession, ensure_owner
from skillpath.schemas.stats import (
    AchievementOutSchema,
    BadgeOutSchema,
    LeaderboardEntrySchema,
    LevelOutSchema,
)
from skillpath.services import gamification

router = APIRouter(prefix="/api", tags=["gamification"])
settings = get_settings()


@router.get("/levels/{user_id}", response_model=LevelOutSchema)
async def get_level(user_id: int, profile: CurrentProfile, db: DbSession):
    """Level, total score and badge count of the caller."""
    ensure_owner(profile, user_id)
    return await gamification.level_summary(db, profile)


@router.get("/badges/{user_id}", response_model=list[BadgeOutSchema])
async def list_badges(user_id: int, profile: CurrentProfile, db: DbSession):
    ensure_owner(profile, user_id)
    result = await db.execute(
        select(UserBadge)
        .where(UserBadge.user_id == user_id)
        .order_by(UserBadge.earned_at.desc(), UserBadge.id.desc())
    )
    return result.scalars().all()


@router.get("/achievements", response_model=list[AchievementOutSchema])
async def list_achievements(profile: CurrentProfile, db: DbSession):
    return await gamification.list_achievements(db, profile.user_id)


@router.get("/leaderboard", response_model=list[LeaderboardEntrySchema])
async def get_leaderboard(
    profile: CurrentProfile,
    db: DbSession,
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
):
    """Top students by total points."""
    return await gamification.leaderboard(db, limit or settings.leaderboard_default_limit)
