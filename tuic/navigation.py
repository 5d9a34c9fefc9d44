"""Directional focus navigation over a sparse grid of buttons.

``FocusNavigator.find_next`` resolves a move in three stages:

* the literally adjacent cell, when a button lives there;
* the wrap policy (``WrapMode``), when wrapping is enabled;
* a bounded fallback search that walks outward along the requested direction
  and, at each distance ``d``, scans the whole perpendicular line in offset
  order ``0, -1, +1, -2, +2, ...`` so the nearest occupied cell wins.

The navigator never writes the focus pointer directly; ``move_focus`` and the
other focus helpers go through ``FocusRegistry.set_focus``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import Enum

from .errors import InvalidMoveError, NoFocusableElementsError
from .focus import FocusRegistry, Position

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_BOUND = 10
PAGE_ROWS = 3


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


class WrapMode(str, Enum):
    NONE = "none"
    ROW = "row"
    COLUMN = "column"
    BOTH = "both"


def coerce_direction(value: object) -> Direction:
    if isinstance(value, Direction):
        return value
    try:
        return Direction(value)
    except ValueError:
        raise InvalidMoveError(value) from None


def _offsets(span: int) -> Iterator[int]:
    yield 0
    for k in range(1, span + 1):
        yield -k
        yield k


class FocusNavigator:
    def __init__(
        self,
        registry: FocusRegistry,
        *,
        wrap_mode: WrapMode = WrapMode.BOTH,
        wrapping: bool = True,
        search_bound: int | None = DEFAULT_SEARCH_BOUND,
    ) -> None:
        if search_bound is not None and search_bound < 1:
            raise ValueError("search_bound must be >= 1")
        self._registry = registry
        self._wrap_mode = WrapMode(wrap_mode)
        self._wrapping = bool(wrapping)
        self._search_bound = None if search_bound is None else int(search_bound)

    @property
    def wrap_mode(self) -> WrapMode:
        return self._wrap_mode

    @property
    def wrapping(self) -> bool:
        return self._wrapping

    @property
    def search_bound(self) -> int | None:
        return self._search_bound

    def find_next(self, current: Position, direction: Direction | str) -> Position:
        direction = coerce_direction(direction)
        positions = set(self._registry.all_positions())
        if not positions:
            raise NoFocusableElementsError()

        dr, dc = direction.delta
        adjacent = Position(current.row + dr, current.column + dc)
        if adjacent in positions:
            return adjacent

        if self._wrapping and self._wrap_mode is not WrapMode.NONE:
            wrapped = self._wrap(current, direction, positions)
            if wrapped is not None:
                return wrapped

        return self._search(current, direction, positions)

    def move_focus(self, direction: Direction | str) -> Position:
        direction = coerce_direction(direction)
        with self._registry.lock:
            current = self._registry.focused_position()
            if current is None:
                return self.focus_first()
            target = self.find_next(current, direction)
            self._registry.set_focus(target.row, target.column)
            return target

    def focus_first(self) -> Position:
        """Focus the first interactive button in row-major order."""
        if not len(self._registry):
            raise NoFocusableElementsError()
        candidates = self._registry.interactive_positions()
        if not candidates:
            raise NoFocusableElementsError("every button is disabled")
        target = candidates[0]
        self._registry.set_focus(target.row, target.column)
        return target

    def focus_last(self) -> Position:
        """Focus the rightmost interactive button on the bottom row."""
        positions = self._registry.all_positions()
        if not positions:
            raise NoFocusableElementsError()
        bottom = positions[-1].row
        candidates = [p for p in self._registry.interactive_positions() if p.row == bottom]
        if not candidates:
            raise NoFocusableElementsError(f"no interactive button on row {bottom}")
        target = candidates[-1]
        self._registry.set_focus(target.row, target.column)
        return target

    def page(self, direction: Direction | str, *, rows: int = PAGE_ROWS) -> Position:
        """Jump up to ``rows`` rows, staying in the current column when possible.

        Rows are tried from the farthest one back towards the current row, so a
        gap in the column shortens the jump instead of cancelling it.
        """
        direction = coerce_direction(direction)
        if not direction.is_vertical:
            raise InvalidMoveError(direction)
        if rows < 1:
            raise ValueError("rows must be >= 1")
        with self._registry.lock:
            current = self._registry.focused_position()
            if current is None:
                return self.focus_first()
            if direction is Direction.UP:
                scan = range(max(0, current.row - rows), current.row + 1)
            else:
                max_row, _ = self._registry.extent()
                scan = range(min(current.row + rows, max_row), current.row - 1, -1)

            interactive = self._registry.interactive_positions()
            for row in scan:
                candidate = Position(row, current.column)
                if candidate in interactive:
                    self._registry.set_focus(candidate.row, candidate.column)
                    return candidate
            for row in scan:
                for candidate in interactive:
                    if candidate.row == row:
                        self._registry.set_focus(candidate.row, candidate.column)
                        return candidate
            raise NoFocusableElementsError(f"no interactive button within {rows} rows {direction.value}")

    def _wrap(self, current: Position, direction: Direction, positions: set[Position]) -> Position | None:
        mode = self._wrap_mode
        if mode is WrapMode.ROW:
            if direction.is_vertical:
                return None
            return self._row_edge(current.row, direction, positions)
        if mode is WrapMode.COLUMN:
            if not direction.is_vertical:
                return None
            return self._column_edge(current.column, direction, positions)
        if mode is WrapMode.BOTH:
            if direction.is_vertical:
                found = self._column_edge(current.column, direction, positions)
            else:
                found = self._row_edge(current.row, direction, positions)
            if found is not None:
                return found
            return self._overall_edge(direction, positions)
        return None

    @staticmethod
    def _row_edge(row: int, direction: Direction, positions: set[Position]) -> Position | None:
        in_row = [p for p in positions if p.row == row]
        if not in_row:
            return None
        if direction is Direction.LEFT:
            return max(in_row, key=lambda p: p.column)
        return min(in_row, key=lambda p: p.column)

    @staticmethod
    def _column_edge(column: int, direction: Direction, positions: set[Position]) -> Position | None:
        in_column = [p for p in positions if p.column == column]
        if not in_column:
            return None
        if direction is Direction.UP:
            return max(in_column, key=lambda p: p.row)
        return min(in_column, key=lambda p: p.row)

    @staticmethod
    def _overall_edge(direction: Direction, positions: set[Position]) -> Position:
        # Ties resolve to the first candidate in row-major order.
        if direction is Direction.UP:
            return min(positions, key=lambda p: (-p.row, p.column))
        if direction is Direction.DOWN:
            return min(positions, key=lambda p: (p.row, p.column))
        if direction is Direction.LEFT:
            return min(positions, key=lambda p: (-p.column, p.row))
        return min(positions, key=lambda p: (p.column, p.row))

    def _effective_bound(self, current: Position) -> int:
        if self._search_bound is not None:
            return self._search_bound
        max_row, max_column = self._registry.extent()
        return max(1, max_row, max_column, current.row, current.column) + 1

    def _search(self, current: Position, direction: Direction, positions: set[Position]) -> Position:
        bound = self._effective_bound(current)
        max_row, max_column = self._registry.extent()
        # Wide enough to reach every registered cell on the perpendicular line.
        if direction.is_vertical:
            span = max(bound, max_column, current.column)
        else:
            span = max(bound, max_row, current.row)
        dr, dc = direction.delta
        for distance in range(1, bound + 1):
            for offset in _offsets(span):
                if direction.is_vertical:
                    candidate = Position(current.row + dr * distance, current.column + offset)
                else:
                    candidate = Position(current.row + offset, current.column + dc * distance)
                if candidate.row < 0 or candidate.column < 0:
                    continue
                if candidate in positions:
                    return candidate
        logger.debug("no button within %d cells %s of %s", bound, direction.value, current)
        raise NoFocusableElementsError(f"no button within {bound} cells {direction.value} of {current}")
