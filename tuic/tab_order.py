from __future__ import annotations

from collections.abc import Iterable

from .errors import NoFocusableElementsError
from .focus import FocusRegistry, Position


def tab_order(positions: Iterable[Position]) -> list[Position]:
    """Row-major order (row ascending, then column ascending)."""
    return sorted(positions)


def next_in_tab_order(
    positions: Iterable[Position],
    current: Position | None,
    *,
    reverse: bool = False,
) -> Position:
    ordered = tab_order(positions)
    if not ordered:
        raise NoFocusableElementsError()
    if current is None:
        return ordered[-1] if reverse else ordered[0]
    try:
        index = ordered.index(current)
    except ValueError:
        return ordered[-1] if reverse else ordered[0]
    step = -1 if reverse else 1
    return ordered[(index + step) % len(ordered)]


class TabTraversal:
    """Sequential focus movement independent of grid adjacency.

    Holds no ordering state of its own; every call re-reads the registry.
    """

    def __init__(self, registry: FocusRegistry) -> None:
        self._registry = registry

    def peek(self, *, reverse: bool = False) -> Position:
        return next_in_tab_order(
            self._registry.all_positions(),
            self._registry.focused_position(),
            reverse=reverse,
        )

    def advance(self, *, reverse: bool = False) -> Position:
        with self._registry.lock:
            target = self.peek(reverse=reverse)
            self._registry.set_focus(target.row, target.column)
            return target
