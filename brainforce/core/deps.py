import logging
from typing import Optional

from fastapi import Request

from brainforce.core.errors import AuthenticationFailure
from brainforce.core.security import decode_access_token

logger = logging.getLogger(__name__)

COOKIE_NAME = "access_token"


def extract_token(request: Request) -> Optional[str]:
    """
    Pull a token from the Authorization header, falling back to the cookie
    the web pages set at login.
    """
    auth_header = request.headers.get("authorization")
    token = auth_header or request.cookies.get(COOKIE_NAME)
    if not token:
        return None

    # Support both "Bearer <token>" and raw token values.
    if token.lower().startswith("bearer "):
        token = token[7:].strip()
    return token or None


def get_optional_claims(request: Request) -> Optional[dict]:
    return decode_access_token(extract_token(request))


def get_current_claims(request: Request) -> dict:
    token = extract_token(request)
    if not token:
        logger.debug("reject reason=missing_token path=%s", request.url.path)
        raise AuthenticationFailure("Not authenticated")

    payload = decode_access_token(token)
    if not payload:
        logger.debug("reject reason=invalid_token path=%s", request.url.path)
        raise AuthenticationFailure("Invalid token")

    return payload
