"""Learning module: shared catalog entries (owner_id null) or generated for one user."""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from skillpath.db.session import Base
from skillpath.models._time import utcnow


class LearningModule(Base):
    __tablename__ = "learning_modules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    content = Column(Text, nullable=False, default="")
    difficulty = Column(String(16), nullable=False, default="beginner")
    category = Column(String(128), nullable=False, default="general")
    estimated_duration = Column(Integer, nullable=False, default=30)  # minutes
    points_reward = Column(Integer, nullable=False, default=10)
    order_index = Column(Integer, nullable=False, default=0)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    quizzes = relationship("Quiz", back_populates="module", cascade="all, delete-orphan", order_by="Quiz.id")

    def visible_to(self, user_id: int) -> bool:
        return self.owner_id is None or self.owner_id == user_id
