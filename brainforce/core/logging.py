import logging

from brainforce.core.config import LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Attach a single console handler to the package logger."""
    logger = logging.getLogger("brainforce")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter("%(levelname)s: [%(name)s] %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
