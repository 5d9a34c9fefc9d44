"""Runtime settings for the calculator shell.

There is no settings file; the environment is the only override, in the same
way the rest of the package reads a handful of ``TUIC_*`` variables.  Bad
values are reported and replaced by the defaults rather than stopping startup.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from .navigation import DEFAULT_SEARCH_BOUND, WrapMode

logger = logging.getLogger(__name__)

WRAP_MODE_ENV = "TUIC_WRAP_MODE"
WRAPPING_ENV = "TUIC_WRAPPING"
SEARCH_BOUND_ENV = "TUIC_SEARCH_BOUND"
LOG_LEVEL_ENV = "TUIC_LOG_LEVEL"

WINDOW_SIZE = (480, 600)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})
_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True, slots=True)
class CalculatorConfig:
    wrap_mode: WrapMode = WrapMode.BOTH
    wrapping: bool = True
    # None derives the bound from the keypad extent.
    search_bound: int | None = DEFAULT_SEARCH_BOUND
    log_level: str = "WARNING"
    window_size: tuple[int, int] = WINDOW_SIZE

    def __post_init__(self) -> None:
        if self.search_bound is not None and self.search_bound < 1:
            raise ValueError("search_bound must be >= 1")
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        w, h = self.window_size
        if w <= 0 or h <= 0:
            raise ValueError("window_size must be positive")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "CalculatorConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            wrap_mode=_parse_wrap_mode(env.get(WRAP_MODE_ENV), defaults.wrap_mode),
            wrapping=_parse_bool(WRAPPING_ENV, env.get(WRAPPING_ENV), defaults.wrapping),
            search_bound=_parse_search_bound(env.get(SEARCH_BOUND_ENV), defaults.search_bound),
            log_level=_parse_log_level(env.get(LOG_LEVEL_ENV), defaults.log_level),
        )


def _parse_wrap_mode(raw: str | None, fallback: WrapMode) -> WrapMode:
    if raw is None or raw.strip() == "":
        return fallback
    try:
        return WrapMode(raw.strip().lower())
    except ValueError:
        logger.warning("ignoring %s=%r; expected one of %s", WRAP_MODE_ENV, raw, [m.value for m in WrapMode])
        return fallback


def _parse_bool(name: str, raw: str | None, fallback: bool) -> bool:
    if raw is None or raw.strip() == "":
        return fallback
    token = raw.strip().lower()
    if token in _TRUE:
        return True
    if token in _FALSE:
        return False
    logger.warning("ignoring %s=%r; expected a boolean", name, raw)
    return fallback


def _parse_search_bound(raw: str | None, fallback: int | None) -> int | None:
    if raw is None or raw.strip() == "":
        return fallback
    token = raw.strip().lower()
    if token == "auto":
        return None
    try:
        value = int(token)
    except ValueError:
        value = 0
    if value < 1:
        logger.warning("ignoring %s=%r; expected a positive integer or 'auto'", SEARCH_BOUND_ENV, raw)
        return fallback
    return value


def _parse_log_level(raw: str | None, fallback: str) -> str:
    if raw is None or raw.strip() == "":
        return fallback
    token = raw.strip().upper()
    if token not in _LOG_LEVELS:
        logger.warning("ignoring %s=%r; expected one of %s", LOG_LEVEL_ENV, raw, sorted(_LOG_LEVELS))
        return fallback
    return token
