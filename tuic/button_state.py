"""Lifecycle state machine for a single keypad button.

A button moves between ``normal``, ``focused``, ``pressed`` and ``disabled``.
Only the moves listed in ``_ALLOWED`` are legal; everything else raises
``InvalidTransitionError`` and leaves the state untouched.  The module has no
pygame dependency so it can be exercised headlessly.
"""

from __future__ import annotations

import logging
from enum import Enum

from .errors import InvalidTransitionError

logger = logging.getLogger(__name__)


class ButtonState(str, Enum):
    NORMAL = "normal"
    FOCUSED = "focused"
    PRESSED = "pressed"
    DISABLED = "disabled"


class ButtonKind(str, Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    SPECIAL = "special"


_ALLOWED: dict[ButtonState, frozenset[ButtonState]] = {
    ButtonState.NORMAL: frozenset({ButtonState.FOCUSED, ButtonState.PRESSED, ButtonState.DISABLED}),
    ButtonState.FOCUSED: frozenset({ButtonState.NORMAL, ButtonState.PRESSED, ButtonState.DISABLED}),
    ButtonState.PRESSED: frozenset({ButtonState.NORMAL, ButtonState.FOCUSED, ButtonState.DISABLED}),
    ButtonState.DISABLED: frozenset({ButtonState.NORMAL, ButtonState.FOCUSED}),
}


def is_valid_transition(current: ButtonState, target: ButtonState) -> bool:
    return target in _ALLOWED.get(current, frozenset())


class ButtonStateMachine:
    """Owns one button's current state and enforces the transition table."""

    def __init__(self, state: ButtonState = ButtonState.NORMAL) -> None:
        self._state = ButtonState(state)

    @property
    def state(self) -> ButtonState:
        return self._state

    def can_transition(self, target: ButtonState) -> bool:
        return is_valid_transition(self._state, target)

    def set_state(self, target: ButtonState) -> None:
        target = ButtonState(target)
        if not self.can_transition(target):
            logger.debug("denied transition %s -> %s", self._state.value, target.value)
            raise InvalidTransitionError(self._state, target)
        self._state = target

    def focus(self) -> None:
        self.set_state(ButtonState.FOCUSED)

    def press(self) -> None:
        self.set_state(ButtonState.PRESSED)

    def disable(self) -> None:
        self.set_state(ButtonState.DISABLED)

    # The three wrappers below only act when the button is in the matching state.
    def release(self) -> None:
        if self._state is ButtonState.PRESSED:
            self.set_state(ButtonState.NORMAL)

    def blur(self) -> None:
        if self._state is ButtonState.FOCUSED:
            self.set_state(ButtonState.NORMAL)

    def enable(self) -> None:
        if self._state is ButtonState.DISABLED:
            self.set_state(ButtonState.NORMAL)

    @property
    def is_interactive(self) -> bool:
        return self._state is not ButtonState.DISABLED

    @property
    def is_focused(self) -> bool:
        return self._state is ButtonState.FOCUSED

    @property
    def is_pressed(self) -> bool:
        return self._state is ButtonState.PRESSED
