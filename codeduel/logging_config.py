"""
Logging setup for the server and the CLI.

Every module logs through logging.getLogger(__name__); this module only
decides where records go and how they look.
"""

from __future__ import annotations
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_HANDLER_NAME = "codeduel-console"


def _coerce_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if isinstance(value, int):
        return value
    return logging.INFO


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """
    Attach a console handler to the package logger.

    Calling it again only updates the level.
    """
    logger = logging.getLogger("codeduel")
    logger.setLevel(_coerce_level(level))

    if not any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
