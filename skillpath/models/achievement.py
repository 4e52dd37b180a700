"""Achievements unlocked by total points, and who earned them."""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint

from skillpath.db.session import Base
from skillpath.models._time import utcnow


class Achievement(Base):
    __tablename__ = "achievements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), unique=True, nullable=False)
    description = Column(String(512), nullable=False)
    icon = Column(String(64), nullable=False)
    points_required = Column(Integer, nullable=False)
    badge_color = Column(String(32), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class UserAchievement(Base):
    __tablename__ = "user_achievements"
    __table_args__ = (UniqueConstraint("user_id", "achievement_id", name="uq_user_achievement"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    achievement_id = Column(Integer, ForeignKey("achievements.id", ondelete="CASCADE"), nullable=False)
    earned_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
