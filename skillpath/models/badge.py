"""UserBadge model: earned for a module completed above the badge score."""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint

from skillpath.db.session import Base
from skillpath.models._time import utcnow


class UserBadge(Base):
    __tablename__ = "user_badges"
    __table_args__ = (UniqueConstraint("user_id", "module_id", name="uq_badge_user_module"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    module_id = Column(Integer, ForeignKey("learning_modules.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(String(512), nullable=False)
    icon = Column(String(64), nullable=False, default="star")
    earned_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
