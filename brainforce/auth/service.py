"""
Account operations: registration, login, tokens and profile/score updates.

Registration rules are checked in a fixed order and the first violation wins:
password length, username length, email shape, then email uniqueness. Nothing
touches the database until the first three pass.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from brainforce.auth.models import User
from brainforce.auth.schemas import RegisterRequest
from brainforce.core.config import MIN_PASSWORD_LENGTH, MIN_USERNAME_LENGTH
from brainforce.core.errors import ConflictError, ValidationError
from brainforce.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


# =========================
# LOOKUPS
# =========================

def fetch_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def fetch_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


# =========================
# REGISTER
# =========================

def validate_registration(creds: RegisterRequest) -> None:
    if len(creds.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if len(creds.username) < MIN_USERNAME_LENGTH:
        raise ValidationError(f"Username must be at least {MIN_USERNAME_LENGTH} characters")

    # Checked on the normalised form, which is what gets stored
    if normalize_email(creds.email).find("@") <= 0:
        raise ValidationError("Invalid email")


def register(db: Session, creds: RegisterRequest) -> User:
    validate_registration(creds)

    if fetch_by_email(db, creds.email):
        raise ConflictError(f"Duplicate email: {creds.email}")

    user = User(
        email=normalize_email(creds.email),
        password_hash=hash_password(creds.password),
        firstname=creds.firstname,
        lastname=creds.lastname,
        username=creds.username,
        points=creds.points,
        photo=creds.photo,
        totalquiz=creds.totalquiz,
    )

    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise ConflictError(f"Duplicate email: {creds.email}")
    db.refresh(user)

    logger.info("Registered user id=%s username=%s", user.id, user.username)
    return user


# =========================
# LOGIN
# =========================

def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    """
    Return the user when the credentials match, otherwise None.

    Unknown email and wrong password are deliberately indistinguishable.
    """
    user = fetch_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.info("Invalid credentials for: %s", email)
        return None
    return user


# =========================
# TOKENS
# =========================

def token_claims(user: User) -> dict:
    return {
        "sub": user.email,
        "id": user.id,
        "firstname": user.firstname,
        "lastname": user.lastname,
        "email": user.email,
        "username": user.username,
        "points": user.points,
        "photo": user.photo,
        "totalquiz": user.totalquiz,
    }


def generate_token(user: User) -> str:
    return create_access_token(token_claims(user))


def verify_token(token: Optional[str]) -> Optional[dict]:
    """Decoded claims, or None for anything that is not a valid live token."""
    return decode_access_token(token)


# =========================
# UPDATES
# =========================

def update_score(db: Session, email: str, points_delta: int) -> Optional[int]:
    """
    Add `points_delta` to the user's points and count one more quiz.

    The increment happens inside a single UPDATE statement so concurrent
    submissions for the same user cannot overwrite each other. The new total
    is read back before commit, while the row is still locked by this
    transaction.
    """
    email = normalize_email(email)
    updated = (
        db.query(User)
        .filter(User.email == email)
        .update(
            {
                User.points: User.points + points_delta,
                User.totalquiz: User.totalquiz + 1,
            },
            synchronize_session=False,
        )
    )
    if not updated:
        db.rollback()
        return None

    points = db.query(User.points).filter(User.email == email).scalar()
    db.commit()
    return points


def update_photo(db: Session, email: str, photo: str) -> Optional[User]:
    user = fetch_by_email(db, email)
    if not user:
        return None

    user.photo = photo
    db.commit()
    db.refresh(user)
    return user
