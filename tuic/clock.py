from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Monotonic clock abstraction.

    The pygame shell times its pressed-button flash against this interface so
    tests can drive it with a fake clock.
    """

    def now(self) -> float:
        """Return monotonic seconds."""


class RealClock:
    """Production clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class PressFlash:
    """Remembers which cell was activated last and for how long it stays lit."""

    def __init__(self, clock: Clock, *, duration_s: float = 0.12) -> None:
        if duration_s < 0.0:
            raise ValueError("duration_s must be >= 0")
        self._clock = clock
        self._duration_s = float(duration_s)
        self._key: object | None = None
        self._until = 0.0

    def trigger(self, key: object) -> None:
        self._key = key
        self._until = self._clock.now() + self._duration_s

    def active(self) -> object | None:
        if self._key is None:
            return None
        if self._clock.now() >= self._until:
            self._key = None
            return None
        return self._key
