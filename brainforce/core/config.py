"""
Configuration constants for the application.

Everything is read once from the environment at import time. A `.env` file at
the project root is loaded first so local development does not need exported
variables.
"""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

logger = logging.getLogger(__name__)


def is_production() -> bool:
    return os.getenv("ENVIRONMENT", "").lower() == "production"


# ======================
# TOKENS
# ======================

# The signing secret MUST come from persistent configuration. Regenerating it
# per boot would invalidate every token issued before a restart.
SECRET_KEY = os.getenv("SECRET_KEY", os.getenv("JWT_SECRET_KEY", "")).strip()
if not SECRET_KEY:
    if is_production():
        raise RuntimeError("SECRET_KEY or JWT_SECRET_KEY env var is required in production")
    SECRET_KEY = "dev-secret-key-CHANGE-IN-PRODUCTION-12345678901234567890"
    logger.warning("Using default SECRET_KEY for development. DO NOT USE IN PRODUCTION!")

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# ======================
# PASSWORDS
# ======================

# PBKDF2 iteration count (the hashing work factor).
PASSWORD_HASH_ITERATIONS = int(os.getenv("PASSWORD_HASH_ITERATIONS", "100000"))

MIN_PASSWORD_LENGTH = 8
MIN_USERNAME_LENGTH = 3

# ======================
# CONTENT GENERATION
# ======================

# IMPORTANT: Do NOT hardcode keys in code or commit them to git.
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "").strip()
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_CHALLENGE_MODEL = os.getenv("OPENAI_CHALLENGE_MODEL", "gpt-4o")
OPENAI_TIMEOUT_SECONDS = float(os.getenv("OPENAI_TIMEOUT_SECONDS", "30"))

# ======================
# LOGGING
# ======================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
