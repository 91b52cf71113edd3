from concurrent.futures import ThreadPoolExecutor
import threading
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from brainforce.auth import service
from brainforce.auth.models import User
from brainforce.core.errors import ConflictError, ValidationError
from brainforce.core.security import verify_password
from brainforce.db.base import Base


# =========================
# REGISTER
# =========================

def test_register_stores_lowercased_email_and_hashed_password(db, make_creds):
    user = service.register(db, make_creds(email="Ada@Example.COM"))

    assert user.id is not None
    assert user.email == "ada@example.com"
    assert user.password_hash != "password1"
    assert verify_password("password1", user.password_hash)
    assert not verify_password("password2", user.password_hash)
    assert user.points == 0
    assert user.totalquiz == 0


@pytest.mark.parametrize("password", ["", "a", "1234567"])
def test_short_password_fails_before_touching_the_store(make_creds, password):
    db = MagicMock()

    with pytest.raises(ValidationError) as exc_info:
        service.register(db, make_creds(password=password))

    assert exc_info.value.message == "Password must be at least 8 characters"
    db.query.assert_not_called()
    db.add.assert_not_called()


@pytest.mark.parametrize("username", ["", "a", "ab"])
def test_short_username_fails(db, make_creds, username):
    with pytest.raises(ValidationError) as exc_info:
        service.register(db, make_creds(username=username))

    assert exc_info.value.message == "Username must be at least 3 characters"
    assert db.query(User).count() == 0


@pytest.mark.parametrize("email", ["invalidemail", "@b.com", "", " @b.com", "  @b.com  "])
def test_email_without_at_after_first_character_fails(db, make_creds, email):
    with pytest.raises(ValidationError) as exc_info:
        service.register(db, make_creds(email=email))

    assert exc_info.value.message == "Invalid email"
    assert db.query(User).count() == 0


def test_stored_email_is_the_checked_email(db, make_creds):
    user = service.register(db, make_creds(email="  Ada@Example.com "))

    assert user.email == "ada@example.com"
    assert user.email.find("@") > 0

    with pytest.raises(ConflictError):
        service.register(db, make_creds(email="ada@example.com"))
    assert db.query(User).count() == 1


def test_first_violation_wins(db, make_creds):
    with pytest.raises(ValidationError) as exc_info:
        service.register(db, make_creds(password="short", username="x", email="bad"))
    assert "Password" in exc_info.value.message

    with pytest.raises(ValidationError) as exc_info:
        service.register(db, make_creds(username="x", email="bad"))
    assert "Username" in exc_info.value.message


def test_duplicate_email_in_any_case_conflicts(db, make_creds):
    service.register(db, make_creds(email="a@b.com"))

    with pytest.raises(ConflictError) as exc_info:
        service.register(db, make_creds(email="a@b.com"))
    assert exc_info.value.message == "Duplicate email: a@b.com"

    with pytest.raises(ConflictError) as exc_info:
        service.register(db, make_creds(email="A@B.COM"))
    assert exc_info.value.message == "Duplicate email: A@B.COM"

    assert db.query(User).filter(User.email == "a@b.com").count() == 1


def test_register_keeps_optional_profile_fields(db, make_creds):
    user = service.register(db, make_creds(photo="https://img.example/a.png", points=5, totalquiz=1))

    assert user.photo == "https://img.example/a.png"
    assert user.points == 5
    assert user.totalquiz == 1


# =========================
# LOGIN
# =========================

def test_authenticate_with_right_password(db, user):
    assert service.authenticate(db, "a@b.com", "password1").id == user.id


def test_wrong_password_and_unknown_email_look_the_same(db, user):
    assert service.authenticate(db, "a@b.com", "wrong-password") is None
    assert service.authenticate(db, "nobody@b.com", "password1") is None


def test_login_email_is_case_insensitive(db, make_creds):
    # Registration lower-cases the stored email; login must do the same.
    service.register(db, make_creds(email="Mixed@Case.com"))

    assert service.authenticate(db, "Mixed@Case.com", "password1") is not None
    assert service.authenticate(db, "mixed@case.com", "password1") is not None


def test_fetch_by_id(db, user):
    assert service.fetch_by_id(db, user.id).email == "a@b.com"
    assert service.fetch_by_id(db, user.id + 100) is None


# =========================
# TOKENS
# =========================

def test_token_claims_match_the_user(user):
    claims = service.verify_token(service.generate_token(user))

    assert claims["id"] == user.id
    assert claims["email"] == user.email
    assert claims["username"] == user.username
    assert claims["firstname"] == "Ada"
    assert claims["points"] == 0
    assert claims["totalquiz"] == 0


def test_verify_token_never_raises():
    assert service.verify_token("garbage") is None
    assert service.verify_token(None) is None


# =========================
# SCORE / PHOTO
# =========================

def test_update_score_adds_points_and_counts_quiz(db, user):
    assert service.update_score(db, "a@b.com", 10) == 10
    assert service.update_score(db, "A@B.com", 5) == 15

    db.refresh(user)
    assert user.points == 15
    assert user.totalquiz == 2


def test_update_score_for_unknown_email(db, user):
    assert service.update_score(db, "nobody@b.com", 10) is None


def test_concurrent_score_updates_are_not_lost(tmp_path, make_creds):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'scores.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    setup = Session()
    service.register(setup, make_creds())
    setup.close()

    barrier = threading.Barrier(2)

    def submit(delta):
        session = Session()
        try:
            barrier.wait()
            return service.update_score(session, "a@b.com", delta)
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=2) as pool:
        results = list(pool.map(submit, [10, 5]))

    check = Session()
    stored = check.query(User).filter(User.email == "a@b.com").one()
    check.close()
    engine.dispose()

    assert stored.points == 15
    assert stored.totalquiz == 2
    assert max(results) == 15


def test_update_photo(db, user):
    updated = service.update_photo(db, "a@b.com", "blob://photos/1")

    assert updated.id == user.id
    assert updated.photo == "blob://photos/1"


def test_update_photo_for_unknown_email(db, user):
    assert service.update_photo(db, "nobody@b.com", "blob://photos/1") is None
