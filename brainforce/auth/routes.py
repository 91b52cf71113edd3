from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from brainforce.auth import service
from brainforce.auth.schemas import (
    LoginRequest,
    PhotoUpdate,
    ProfileRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from brainforce.core.deps import get_current_claims
from brainforce.core.errors import AuthenticationFailure
from brainforce.db.session import get_db

router = APIRouter(prefix="/auth", tags=["auth"])


# =========================
# REGISTER
# =========================
@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(creds: RegisterRequest, db: Session = Depends(get_db)):
    user = service.register(db, creds)
    return {"user": user}


# =========================
# LOGIN
# =========================
@router.post("/login", response_model=TokenResponse)
def login(creds: LoginRequest, db: Session = Depends(get_db)):
    user = service.authenticate(db, creds.email, creds.password)
    if not user:
        raise AuthenticationFailure()
    return {"token": service.generate_token(user)}


# =========================
# PROFILE
# =========================
@router.post("/profile")
def profile(body: ProfileRequest) -> Optional[dict]:
    """Decoded claims of the given token, or null when it is not valid."""
    return service.verify_token(body.token)


@router.get("/me")
def me(claims: dict = Depends(get_current_claims)):
    return claims


# =========================
# PHOTO
# =========================
@router.post("/photo", response_model=TokenResponse)
def update_photo(update: PhotoUpdate, db: Session = Depends(get_db)):
    """Store the new photo and hand back a token carrying the refreshed profile."""
    user = service.update_photo(db, update.email, update.photo)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"token": service.generate_token(user)}
