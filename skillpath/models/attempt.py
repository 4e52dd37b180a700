"""QuizAttempt model: one scored submission of a whole quiz."""
import json

from sqlalchemy import Column, Integer, Boolean, Text, DateTime, ForeignKey

from skillpath.db.session import Base
from skillpath.models._time import utcnow


class QuizAttempt(Base):
    __tablename__ = "user_quiz_attempts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    score = Column(Integer, nullable=False)  # 0-100
    answers_json = Column(Text, nullable=False, default="{}")
    passed = Column(Boolean, nullable=False)
    attempted_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    @property
    def answers(self) -> dict[str, str]:
        return json.loads(self.answers_json or "{}")
