"""
Shared OpenAI client.

Everything that talks to OpenAI goes through `get_client()` so that:
- the API key is read once (see core.config) and never logged in full;
- a single client instance, with the configured timeout, is reused;
- the last upstream failure is kept for diagnostics.
"""
import logging
from typing import Optional

import openai

from brainforce.core.config import OPENAI_API_KEY, OPENAI_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

_last_error: Optional[str] = None

# Lazily-created singleton
_client: Optional[openai.OpenAI] = None


def key_present() -> bool:
    return bool(OPENAI_API_KEY)


def key_fingerprint() -> str:
    """Return masked key for safe logging: sk-xxxx...1234"""
    if not OPENAI_API_KEY:
        return "(not set)"
    if len(OPENAI_API_KEY) <= 10:
        return OPENAI_API_KEY[:2] + "***"
    return OPENAI_API_KEY[:6] + "..." + OPENAI_API_KEY[-4:]


def get_client() -> Optional[openai.OpenAI]:
    """
    Return the shared OpenAI client, or None if no key is configured.
    """
    global _client
    if not OPENAI_API_KEY:
        return None
    if _client is None:
        # No automatic retries: a failed generation is reported straight back.
        _client = openai.OpenAI(
            api_key=OPENAI_API_KEY,
            timeout=OPENAI_TIMEOUT_SECONDS,
            max_retries=0,
        )
    return _client


def set_last_error(msg: str):
    global _last_error
    _last_error = msg


def get_last_error() -> Optional[str]:
    return _last_error


def log_startup():
    """Log one-time startup diagnostics."""
    logger.info("OPENAI_API_KEY present: %s", key_present())
    logger.info("key fingerprint: %s", key_fingerprint())
    logger.info("timeout: %ss", OPENAI_TIMEOUT_SECONDS)
