from __future__ import annotations

import pytest

from tuic.focus import Position
from tuic.keypad import CALCULATOR_KEYS, KEYPAD_COLUMNS, KEYPAD_ROWS, build_keypad_registry
from tuic.layout import GridLayout


def test_default_geometry() -> None:
    layout = GridLayout()
    assert layout.total_size == (432, 336)
    assert layout.cell_rect(Position(0, 0)) == (12, 12, 96, 56)
    assert layout.cell_rect(Position(2, 1)) == (116, 140, 96, 56)


def test_position_at_hits_cells_and_misses_gaps() -> None:
    layout = GridLayout()
    assert layout.position_at(126, 150) == Position(2, 1)
    assert layout.position_at(12, 12) == Position(0, 0)
    assert layout.position_at(110, 20) is None
    assert layout.position_at(5, 5) is None
    assert layout.position_at(-40, 30) is None
    assert layout.position_at(433, 20) is None
    assert layout.position_at(20, 400) is None


def test_invalid_layouts_and_cells() -> None:
    with pytest.raises(ValueError):
        GridLayout(rows=0)
    with pytest.raises(ValueError):
        GridLayout(cell_width=0)
    with pytest.raises(ValueError):
        GridLayout(spacing=-1)
    with pytest.raises(ValueError):
        GridLayout().cell_rect(Position(5, 0))


def test_fit_fills_area_and_centers_leftover() -> None:
    fitted = GridLayout().fit(x=10, y=100, width=452, height=400)
    assert (fitted.cell_width, fitted.cell_height) == (101, 68)
    assert (fitted.origin_x, fitted.origin_y) == (10, 102)
    assert fitted.position_at(10 + 12 + 5, 102 + 12 + 5) == Position(0, 0)


def test_fit_clamps_cell_size() -> None:
    big = GridLayout().fit(x=0, y=0, width=2000, height=2000)
    assert (big.cell_width, big.cell_height) == (160, 96)
    total_w, total_h = big.total_size
    assert abs((big.origin_x + total_w / 2) - 1000) <= 1
    assert abs((big.origin_y + total_h / 2) - 1000) <= 1

    small = GridLayout().fit(x=0, y=0, width=50, height=50)
    assert (small.cell_width, small.cell_height) == (40, 28)
    assert (small.origin_x, small.origin_y) == (0, 0)


def test_keypad_definition() -> None:
    registry = build_keypad_registry()
    assert (KEYPAD_ROWS, KEYPAD_COLUMNS) == (5, 4)
    assert len(registry) == len(CALCULATOR_KEYS) == 19
    assert Position(4, 3) not in registry
    assert registry.focused_position() == Position(0, 0)

    values = [b.value for _, b in registry.buttons()]
    assert values[:4] == ["C", "CE", "backspace", "/"]
    assert values[-3:] == ["0", ".", "="]
    assert registry.button_at(Position(1, 3)).label == "×"
    assert all(GridLayout().contains(pos) for pos in registry.all_positions())
