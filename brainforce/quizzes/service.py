import logging
from typing import Any, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from brainforce.auth.models import User
from brainforce.auth.service import fetch_by_id
from brainforce.core.errors import StoreError
from brainforce.quizzes.models import Quiz

logger = logging.getLogger(__name__)


def add_quiz(
    db: Session,
    user_id: int,
    questions: List[Any],
    points: int,
    subject: str,
    difficulty: str,
) -> Optional[Quiz]:
    """
    Save a completed quiz for `user_id`. Returns None when no such user exists.

    Store failures are rolled back, logged and re-raised as StoreError; the
    caller always learns that the quiz was not saved.
    """
    if not fetch_by_id(db, user_id):
        return None

    quiz = Quiz(
        user_id=user_id,
        questions=questions,
        points=points,
        subject=subject,
        difficulty=difficulty,
    )
    try:
        db.add(quiz)
        db.commit()
        db.refresh(quiz)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Failed to save quiz for user=%s: %r", user_id, exc)
        raise StoreError("Could not save quiz") from exc

    return quiz


def list_quizzes(db: Session, user_id: int) -> List[Quiz]:
    return (
        db.query(Quiz)
        .filter(Quiz.user_id == user_id)
        .order_by(Quiz.quiz_id)
        .all()
    )


def leaderboard(db: Session) -> List[User]:
    """All users, highest points first."""
    return db.query(User).order_by(User.points.desc(), User.id).all()
