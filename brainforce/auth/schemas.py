from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class RegisterRequest(BaseModel):
    # Length and format rules are enforced by auth.service.register so that
    # they are checked in a fixed order with fixed messages.
    email: str
    password: str
    username: str
    firstname: str = ""
    lastname: str = ""
    points: int = 0
    photo: Optional[str] = None
    totalquiz: int = 0


class LoginRequest(BaseModel):
    email: str
    password: str


class ProfileRequest(BaseModel):
    token: Optional[str] = None


class PhotoUpdate(BaseModel):
    email: str
    photo: str


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    username: str
    firstname: str
    lastname: str
    points: int
    photo: Optional[str] = None
    totalquiz: int
    created: Optional[datetime] = None


class RegisterResponse(BaseModel):
    user: UserPublic


class TokenResponse(BaseModel):
    token: str
