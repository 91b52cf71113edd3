"""
Domain errors.

Services raise these; `brainforce.main` turns them into JSON responses with
the status code each one carries.
"""
from typing import Any, Optional


class AppError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Malformed registration input."""


class ConflictError(AppError):
    """Email already registered."""


class AuthenticationFailure(AppError):
    status_code = 401

    def __init__(self, message: str = "Invalid email/password"):
        super().__init__(message)


class UpstreamError(AppError):
    """The chat-completion API failed or could not be reached."""

    def __init__(self, message: str = "There was an issue on the server", payload: Optional[Any] = None):
        super().__init__(message)
        self.payload = payload if payload is not None else message


class StoreError(AppError):
    status_code = 500
