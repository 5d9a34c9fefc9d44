from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .button_state import ButtonState
    from .focus import Position


class FocusError(Exception):
    """Base class for focus/navigation failures raised by the core."""


class InvalidTransitionError(FocusError):
    def __init__(self, from_state: "ButtonState", to_state: "ButtonState") -> None:
        super().__init__(f"invalid state transition from {from_state.value} to {to_state.value}")
        self.from_state = from_state
        self.to_state = to_state


class NotFoundError(FocusError, LookupError):
    def __init__(self, position: "Position") -> None:
        super().__init__(f"no button found at position {position}")
        self.position = position


class NoFocusableElementsError(FocusError):
    def __init__(self, message: str = "no focusable buttons available") -> None:
        super().__init__(message)


class InvalidMoveError(FocusError, ValueError):
    def __init__(self, direction: object) -> None:
        super().__init__(f"invalid focus movement: {direction!r}")
        self.direction = direction
