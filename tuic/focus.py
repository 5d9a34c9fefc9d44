"""Buttons and the focus registry.

The registry maps grid positions to buttons and owns the single focus pointer.
Only its own methods move the pointer or the history; renderers read button
state through the accessors and never mutate it.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass

from .button_state import ButtonKind, ButtonState, ButtonStateMachine
from .errors import NotFoundError

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50


@dataclass(frozen=True, slots=True, order=True)
class Position:
    row: int
    column: int

    def __str__(self) -> str:
        return f"({self.row},{self.column})"


class Button:
    def __init__(
        self,
        *,
        label: str,
        value: str,
        kind: ButtonKind,
        position: Position,
        state: ButtonState = ButtonState.NORMAL,
    ) -> None:
        self._label = str(label)
        self._value = str(value)
        self._kind = ButtonKind(kind)
        self._position = position
        self._machine = ButtonStateMachine(state)

    @property
    def label(self) -> str:
        return self._label

    @property
    def value(self) -> str:
        return self._value

    @property
    def kind(self) -> ButtonKind:
        return self._kind

    @property
    def position(self) -> Position:
        return self._position

    @property
    def state(self) -> ButtonState:
        return self._machine.state

    @property
    def is_interactive(self) -> bool:
        return self._machine.is_interactive

    @property
    def is_focused(self) -> bool:
        return self._machine.is_focused

    @property
    def is_pressed(self) -> bool:
        return self._machine.is_pressed

    def set_state(self, target: ButtonState) -> None:
        self._machine.set_state(target)

    def focus(self) -> None:
        self._machine.focus()

    def press(self) -> None:
        self._machine.press()

    def release(self) -> None:
        self._machine.release()

    def blur(self) -> None:
        self._machine.blur()

    def disable(self) -> None:
        self._machine.disable()

    def enable(self) -> None:
        self._machine.enable()

    def __repr__(self) -> str:
        return (
            f"Button(label={self._label!r}, kind={self._kind.value}, "
            f"state={self.state.value}, value={self._value!r}, position={self._position})"
        )


class FocusRegistry:
    """Position -> button map with a single focus pointer and a bounded history.

    Mutators take ``lock`` (re-entrant) so a host that shares the registry
    across threads can also hold it around a read-then-write sequence.
    """

    def __init__(self, buttons: list[Button] | None = None) -> None:
        self._buttons: dict[Position, Button] = {}
        self._focus: Position | None = None
        self._history: deque[Position] = deque(maxlen=HISTORY_LIMIT)
        self.lock = threading.RLock()
        for button in buttons or []:
            self.add(button)

    def __len__(self) -> int:
        return len(self._buttons)

    def __contains__(self, position: object) -> bool:
        return position in self._buttons

    def add(self, button: Button | None) -> None:
        if button is None:
            raise ValueError("cannot add None to focus registry")
        with self.lock:
            position = button.position
            if self._focus == position:
                self.blur()
            # A button can only enter the registry focused by going through set_focus.
            button.blur()
            was_empty = not self._buttons
            self._buttons[position] = button
            if was_empty and self._focus is None:
                self.set_focus(position.row, position.column)

    def remove(self, position: Position) -> Button:
        with self.lock:
            button = self._buttons.get(position)
            if button is None:
                raise NotFoundError(position)
            if self._focus == position:
                self.blur()
            del self._buttons[position]
            return button

    def set_focus(self, row: int, column: int) -> Button:
        position = Position(row, column)
        with self.lock:
            target = self._buttons.get(position)
            if target is None:
                raise NotFoundError(position)
            if self._focus != position:
                previous = self.focused_button()
                if previous is not None:
                    previous.blur()
                    self._focus = None
                target.blur()
                target.focus()
            elif not target.is_focused:
                target.focus()
            self._focus = position
            self._add_to_history(position)
            return target

    def blur(self) -> None:
        with self.lock:
            button = self.focused_button()
            if button is None:
                return
            button.blur()
            self._focus = None

    def clear(self) -> None:
        with self.lock:
            self.blur()
            self._buttons.clear()
            self._history.clear()

    def clear_history(self) -> None:
        with self.lock:
            self._history.clear()

    def focused_button(self) -> Button | None:
        if self._focus is None:
            return None
        return self._buttons.get(self._focus)

    def focused_position(self) -> Position | None:
        return self._focus

    def has_focus(self) -> bool:
        return self._focus is not None

    def button_at(self, position: Position) -> Button | None:
        return self._buttons.get(position)

    def all_positions(self) -> list[Position]:
        return sorted(self._buttons)

    def interactive_positions(self) -> list[Position]:
        return [pos for pos in sorted(self._buttons) if self._buttons[pos].is_interactive]

    def buttons(self) -> Iterator[tuple[Position, Button]]:
        for pos in sorted(self._buttons):
            yield pos, self._buttons[pos]

    def history(self) -> list[Position]:
        return list(self._history)

    def extent(self) -> tuple[int, int]:
        """Return ``(max_row, max_column)`` over registered positions, ``(-1, -1)`` if empty."""
        if not self._buttons:
            return -1, -1
        return max(p.row for p in self._buttons), max(p.column for p in self._buttons)

    def _add_to_history(self, position: Position) -> None:
        try:
            self._history.remove(position)
        except ValueError:
            pass
        self._history.append(position)
