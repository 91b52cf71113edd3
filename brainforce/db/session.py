from typing import Iterator

from sqlalchemy.orm import Session

from brainforce.db.base import SessionLocal


def get_db() -> Iterator[Session]:
    """One session per request, always closed afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
