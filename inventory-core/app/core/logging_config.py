# app/core/logging_config.py
import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Install a single stream handler on the ``app`` logger.

    Safe to call more than once; later calls only adjust the level.
    """
    global _configured

    logger = logging.getLogger("app")
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True
