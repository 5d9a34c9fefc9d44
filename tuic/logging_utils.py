from __future__ import annotations

import logging
from typing import Optional, TextIO

LOGGER_NAME = "tuic"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def resolve_log_level(name: str | int | None, default: int = logging.WARNING) -> int:
    """Map a level name (``"debug"``, ``"INFO"``) or number to a logging level."""
    if name is None:
        return default
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(level: str | int | None = None, *, stream: Optional[TextIO] = None) -> logging.Logger:
    """Attach one stream handler to the package logger; repeated calls only update the level."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_log_level(level))
    if not any(getattr(handler, "_tuic_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler(stream)
        handler._tuic_handler = True  # type: ignore[attr-defined]
        handler.setFormatter(logging.Formatter(LOG_FORMAT, "%H:%M:%S"))
        logger.addHandler(handler)
    return logger
