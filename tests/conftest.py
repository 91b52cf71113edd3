import os
from types import SimpleNamespace

# Configuration is read at import time, so set it before the app is imported.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")
os.environ["OPENAI_API_KEY"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from brainforce.ai.gateway import ContentGateway, get_gateway  # noqa: E402
from brainforce.auth import service as auth_service  # noqa: E402
from brainforce.auth.schemas import RegisterRequest  # noqa: E402
from brainforce.db.base import Base, enable_sqlite_foreign_keys  # noqa: E402
from brainforce.db.session import get_db  # noqa: E402
from brainforce.main import app  # noqa: E402


class FakeCompletions:
    """Stands in for `client.chat.completions` and records every call."""

    def __init__(self):
        self.calls = []
        self.reply = '[{"question": "What is 2 + 2?", "answer": "4"}]'
        self.error = None

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self):
        self.chat = SimpleNamespace(completions=FakeCompletions())


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_openai():
    return FakeOpenAI()


@pytest.fixture
def completions(fake_openai):
    return fake_openai.chat.completions


@pytest.fixture
def client(session_factory, fake_openai):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_gateway] = lambda: ContentGateway(client=fake_openai)
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


def _make_creds(**overrides) -> RegisterRequest:
    fields = {
        "email": "a@b.com",
        "password": "password1",
        "username": "abc",
        "firstname": "Ada",
        "lastname": "Lovelace",
        "points": 0,
        "totalquiz": 0,
    }
    fields.update(overrides)
    return RegisterRequest(**fields)


@pytest.fixture
def make_creds():
    return _make_creds


@pytest.fixture
def user(db):
    return auth_service.register(db, _make_creds())


@pytest.fixture
def token(user):
    return auth_service.generate_token(user)
