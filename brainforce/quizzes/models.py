from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func

from brainforce.db.base import Base


class Quiz(Base):
    """A completed quiz submitted for scoring. Never updated after insert."""

    __tablename__ = "quizzes"

    quiz_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Ordered list of question entries, stored as-is
    questions = Column(JSON, nullable=False)

    points = Column(Integer, nullable=False, default=0)
    subject = Column(String, nullable=False)
    difficulty = Column(String, nullable=False)

    created = Column(DateTime(timezone=True), server_default=func.now())
