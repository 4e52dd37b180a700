"""Quiz model: questions of one module stored as a JSON array."""
import json

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from skillpath.db.session import Base
from skillpath.models._time import utcnow


class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    module_id = Column(Integer, ForeignKey("learning_modules.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    # questions: JSON array of {id, question, options, correct_answer}
    questions_json = Column(Text, nullable=False, default="[]")
    passing_score = Column(Integer, nullable=False, default=70)
    points_reward = Column(Integer, nullable=False, default=20)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    module = relationship("LearningModule", back_populates="quizzes")

    @property
    def questions(self) -> list[dict]:
        return json.loads(self.questions_json or "[]")

    @questions.setter
    def questions(self, value: list[dict]) -> None:
        self.questions_json = json.dumps(value)
