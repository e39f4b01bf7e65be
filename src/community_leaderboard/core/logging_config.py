"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys

from community_leaderboard.core.settings import settings

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a stdout handler to the package logger once.

    Args:
        level: Level name or number; falls back to ``LOG_LEVEL``.

    Returns:
        The configured ``community_leaderboard`` logger.
    """
    logger = logging.getLogger("community_leaderboard")
    if logger.handlers:
        return logger

    resolved = level if level is not None else settings.log_level
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO

    logger.setLevel(resolved)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    # SQL echo goes through its own logger; keep it quiet unless asked for.
    if not settings.sql_debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return logger
