"""Profile model: role, skill level and the gamification totals of one user."""
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from skillpath.db.session import Base
from skillpath.models._time import utcnow

ROLES = ("student", "teacher")
SKILL_LEVELS = ("beginner", "intermediate", "advanced")


class Profile(Base):
    __tablename__ = "profiles"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    full_name = Column(String(255), nullable=False, default="User")
    email = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default="student")  # student | teacher
    skill_level = Column(String(16), nullable=False, default="beginner")
    # school form / grade and subject; students only
    form = Column(String(64), nullable=True)
    subject = Column(String(128), nullable=True)

    total_points = Column(Integer, nullable=False, default=0)
    streak_days = Column(Integer, nullable=False, default=0)
    last_active_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="profile")

    @property
    def is_teacher(self) -> bool:
        return self.role == "teacher"
