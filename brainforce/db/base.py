import logging
import os
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)


def _build_database_url() -> str:
    """
    Determine the database URL.

    - Prefer DATABASE_URL from the environment (production).
    - Fallback to a local SQLite file for development.
    - Normalize legacy postgres:// URLs to SQLAlchemy's postgresql+psycopg2://.
    """
    url = os.getenv("DATABASE_URL", "sqlite:///./local.db").strip()

    if url.startswith("postgres://"):
        # SQLAlchemy 2.x expects a driver-qualified URL
        url = url.replace("postgres://", "postgresql+psycopg2://", 1)

    return url


DATABASE_URL = _build_database_url()

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    # Needed for SQLite when used with FastAPI's threadpool
    connect_args = {"check_same_thread": False}


def enable_sqlite_foreign_keys(target_engine) -> None:
    """SQLite only enforces FOREIGN KEY constraints when asked to, per connection."""

    @event.listens_for(target_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(DATABASE_URL, connect_args=connect_args, future=True)
if engine.url.get_backend_name() == "sqlite":
    enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def log_database_backend() -> None:
    """Log which database the app is talking to, without the password."""
    url_safe = engine.url.render_as_string(hide_password=True)
    backend = engine.url.get_backend_name()
    logger.info("Using database backend=%s url=%s", backend, url_safe)

    if backend == "sqlite" and engine.url.database:
        db_path = Path(engine.url.database).resolve()
        exists = db_path.exists()
        size = db_path.stat().st_size if exists else 0
        logger.info("SQLite path=%s exists=%s size_bytes=%s", db_path, exists, size)
