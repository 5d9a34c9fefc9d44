"""Pixel geometry for the keypad grid.

Pure integer arithmetic with no pygame dependency: the pygame shell converts
``cell_rect`` tuples into ``pygame.Rect`` objects and feeds mouse coordinates
to ``position_at``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .focus import Position


@dataclass(frozen=True, slots=True)
class GridLayout:
    rows: int = 5
    columns: int = 4
    cell_width: int = 96
    cell_height: int = 56
    spacing: int = 8
    padding: int = 12
    origin_x: int = 0
    origin_y: int = 0

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.columns <= 0:
            raise ValueError("rows and columns must be > 0")
        if self.cell_width <= 0 or self.cell_height <= 0:
            raise ValueError("cell size must be > 0")
        if self.spacing < 0 or self.padding < 0:
            raise ValueError("spacing and padding must be >= 0")

    @property
    def total_size(self) -> tuple[int, int]:
        w = self.columns * self.cell_width + (self.columns - 1) * self.spacing + 2 * self.padding
        h = self.rows * self.cell_height + (self.rows - 1) * self.spacing + 2 * self.padding
        return w, h

    def contains(self, position: Position) -> bool:
        return 0 <= position.row < self.rows and 0 <= position.column < self.columns

    def cell_rect(self, position: Position) -> tuple[int, int, int, int]:
        """Return ``(x, y, w, h)`` for a cell."""
        if not self.contains(position):
            raise ValueError(f"position {position} outside {self.rows}x{self.columns} grid")
        x = self.origin_x + self.padding + position.column * (self.cell_width + self.spacing)
        y = self.origin_y + self.padding + position.row * (self.cell_height + self.spacing)
        return x, y, self.cell_width, self.cell_height

    def position_at(self, x: int, y: int) -> Position | None:
        """Map a pixel to the cell under it; gaps and outside points map to ``None``."""
        lx = int(x) - self.origin_x - self.padding
        ly = int(y) - self.origin_y - self.padding
        if lx < 0 or ly < 0:
            return None
        col, col_off = divmod(lx, self.cell_width + self.spacing)
        row, row_off = divmod(ly, self.cell_height + self.spacing)
        if col_off >= self.cell_width or row_off >= self.cell_height:
            return None
        position = Position(row, col)
        return position if self.contains(position) else None

    def fit(
        self,
        *,
        x: int,
        y: int,
        width: int,
        height: int,
        min_cell: tuple[int, int] = (40, 28),
        max_cell: tuple[int, int] = (160, 96),
    ) -> "GridLayout":
        """Return a copy whose cells fill the given area, clamped to ``min_cell``/``max_cell``."""
        avail_w = width - 2 * self.padding - (self.columns - 1) * self.spacing
        avail_h = height - 2 * self.padding - (self.rows - 1) * self.spacing
        cell_w = max(min_cell[0], min(max_cell[0], avail_w // self.columns))
        cell_h = max(min_cell[1], min(max_cell[1], avail_h // self.rows))

        fitted = replace(self, cell_width=cell_w, cell_height=cell_h, origin_x=int(x), origin_y=int(y))
        # Center inside the area when the clamp leaves slack.
        total_w, total_h = fitted.total_size
        dx = max(0, (width - total_w) // 2)
        dy = max(0, (height - total_h) // 2)
        return replace(fitted, origin_x=int(x) + dx, origin_y=int(y) + dy)
