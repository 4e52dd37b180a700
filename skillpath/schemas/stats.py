"""Pydantic schemas for levels, badges, achievements and the leaderboard."""
from datetime import datetime

from pydantic import BaseModel


class LevelOutSchema(BaseModel):
    user_id: int
    total_score: int
    level: int
    current_level: str
    next_level_points: int
    badges_count: int
    points_sum: int
    completed_modules: int
    total_modules_needed: int
    next_level: str
    streak_days: int
    updated_at: datetime


class BadgeOutSchema(BaseModel):
    id: int
    user_id: int
    module_id: int
    name: str
    description: str
    icon: str
    earned_at: datetime

    class Config:
        from_attributes = True


class AchievementOutSchema(BaseModel):
    id: int
    title: str
    description: str
    icon: str
    points_required: int
    badge_color: str
    earned: bool = False
    earned_at: datetime | None = None


class LeaderboardEntrySchema(BaseModel):
    rank: int
    user_id: int
    full_name: str
    total_score: int
    level: int
