"""Lesson model: teacher-authored content."""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey

from skillpath.db.session import Base
from skillpath.models._time import utcnow


class Lesson(Base):
    __tablename__ = "lessons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    teacher_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False, default="")
    lesson_type = Column(String(64), nullable=False, default="lesson")
    content_type = Column(String(64), nullable=False, default="text")
    status = Column(String(16), nullable=False, default="draft")
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
