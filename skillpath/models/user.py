"""User account: credentials only; everything else lives on Profile."""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from skillpath.db.session import Base
from skillpath.models._time import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    profile = relationship("Profile", back_populates="user", uselist=False, cascade="all, delete-orphan")
