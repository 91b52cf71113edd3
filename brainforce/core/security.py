from datetime import datetime, timedelta, timezone
from typing import Optional
import hashlib
import hmac
import logging
import os

from jose import jwt, JWTError

from brainforce.core.config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ALGORITHM,
    PASSWORD_HASH_ITERATIONS,
    SECRET_KEY,
)

logger = logging.getLogger(__name__)

# ======================
# PASSWORD HASHING (PBKDF2)
# ======================

# Stored format: "<iterations>:<salt hex>:<hash hex>". Keeping the iteration
# count next to the hash lets the work factor change without breaking old rows.


def _pbkdf2(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode(), salt, iterations)


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    iterations = iterations or PASSWORD_HASH_ITERATIONS
    salt = os.urandom(16)
    pwd_hash = _pbkdf2(password, salt, iterations)
    return f"{iterations}:{salt.hex()}:{pwd_hash.hex()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        iterations_str, salt_hex, hash_hex = stored.split(":")
        iterations = int(iterations_str)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(hash_hex)
        if iterations <= 0:
            raise ValueError("iteration count must be positive")
    except (AttributeError, ValueError):
        logger.warning("Stored password hash is malformed")
        return False

    return hmac.compare_digest(_pbkdf2(password, salt, iterations), expected)


# ======================
# JWT
# ======================

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: Optional[str]) -> Optional[dict]:
    if not token or not isinstance(token, str):
        return None
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.debug("Token expired")
        return None
    except JWTError as e:
        logger.debug("JWT decode error: %s", type(e).__name__)
        return None
