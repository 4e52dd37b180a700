"""Skill assessment questions and the results users submit."""
import json

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey

from skillpath.db.session import Base
from skillpath.models._time import utcnow


class AssessmentQuestion(Base):
    __tablename__ = "assessment_questions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    question_text = Column(Text, nullable=False)
    options_json = Column(Text, nullable=False)  # JSON array of strings
    correct_answer = Column(String(255), nullable=False)
    skill_area = Column(String(128), nullable=False)
    difficulty = Column(String(16), nullable=False, default="beginner")
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    @property
    def options(self) -> list[str]:
        return json.loads(self.options_json)


class UserAssessment(Base):
    __tablename__ = "user_assessments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    answers_json = Column(Text, nullable=False)
    score = Column(Integer, nullable=False)
    skill_level = Column(String(16), nullable=False)
    completed_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
