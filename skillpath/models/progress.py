"""ModuleProgress: one row per (user, module); answers kept as JSON text."""
import json

from sqlalchemy import Column, Integer, Boolean, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from skillpath.db.session import Base
from skillpath.models._time import utcnow


class ModuleProgress(Base):
    __tablename__ = "user_module_progress"
    __table_args__ = (UniqueConstraint("user_id", "module_id", name="uq_progress_user_module"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    module_id = Column(Integer, ForeignKey("learning_modules.id", ondelete="CASCADE"), nullable=False, index=True)

    progress_percentage = Column(Integer, nullable=False, default=0)  # 0-100
    is_completed = Column(Boolean, nullable=False, default=False)
    is_read_only = Column(Boolean, nullable=False, default=False)
    # module completion points are paid once, reset does not clear this
    points_awarded = Column(Boolean, nullable=False, default=False)

    # {"<quiz_id>:<question_id>": "<answer>"}; correct_json lists keys already rewarded
    answers_json = Column(Text, nullable=False, default="{}")
    correct_json = Column(Text, nullable=False, default="[]")

    started_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    module = relationship("LearningModule")

    @property
    def answers(self) -> dict[str, str]:
        return json.loads(self.answers_json or "{}")

    @answers.setter
    def answers(self, value: dict[str, str]) -> None:
        self.answers_json = json.dumps(value)

    @property
    def correct_question_ids(self) -> list[str]:
        return json.loads(self.correct_json or "[]")

    @correct_question_ids.setter
    def correct_question_ids(self, value: list[str]) -> None:
        self.correct_json = json.dumps(sorted(set(value)))
