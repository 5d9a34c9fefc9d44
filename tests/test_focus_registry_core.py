from __future__ import annotations

import pytest

from tuic.button_state import ButtonKind, ButtonState
from tuic.errors import NotFoundError
from tuic.focus import HISTORY_LIMIT, Button, FocusRegistry, Position


def _button(row: int, column: int, *, state: ButtonState = ButtonState.NORMAL) -> Button:
    label = f"{row}{column}"
    return Button(label=label, value=label, kind=ButtonKind.NUMBER, position=Position(row, column), state=state)


def _grid(rows: int, columns: int) -> FocusRegistry:
    return FocusRegistry([_button(r, c) for r in range(rows) for c in range(columns)])


def _focused_buttons(registry: FocusRegistry) -> list[Button]:
    return [b for _, b in registry.buttons() if b.state is ButtonState.FOCUSED]


def test_first_added_button_is_focused() -> None:
    registry = FocusRegistry()
    assert not registry.has_focus()
    assert registry.focused_button() is None

    registry.add(_button(2, 1))
    registry.add(_button(0, 0))

    assert registry.focused_position() == Position(2, 1)
    assert registry.button_at(Position(0, 0)).state is ButtonState.NORMAL
    assert len(registry) == 2
    assert Position(0, 0) in registry


def test_add_rejects_none() -> None:
    with pytest.raises(ValueError):
        FocusRegistry().add(None)


def test_set_focus_moves_the_single_focused_button() -> None:
    registry = _grid(3, 3)
    for row, column in [(1, 1), (2, 0), (0, 2), (2, 0)]:
        target = registry.set_focus(row, column)
        focused = _focused_buttons(registry)
        assert focused == [target]
        assert registry.focused_position() == Position(row, column)


def test_set_focus_missing_position_raises_and_keeps_focus() -> None:
    registry = _grid(2, 2)
    with pytest.raises(NotFoundError) as info:
        registry.set_focus(5, 5)
    assert isinstance(info.value, LookupError)
    assert info.value.position == Position(5, 5)
    assert registry.focused_position() == Position(0, 0)


def test_set_focus_reasserts_focus_after_press_release() -> None:
    registry = _grid(1, 2)
    button = registry.focused_button()
    button.press()
    button.release()
    assert button.state is ButtonState.NORMAL

    registry.set_focus(0, 0)
    assert button.state is ButtonState.FOCUSED


def test_remove_focused_button_clears_focus() -> None:
    registry = _grid(2, 2)
    registry.set_focus(1, 1)
    removed = registry.remove(Position(1, 1))

    assert removed.state is ButtonState.NORMAL
    assert not registry.has_focus()
    assert Position(1, 1) not in registry
    with pytest.raises(NotFoundError):
        registry.remove(Position(1, 1))


def test_add_over_focused_occupant_clears_focus() -> None:
    registry = _grid(1, 2)
    old = registry.button_at(Position(0, 0))
    replacement = _button(0, 0)
    registry.add(replacement)

    assert old.state is ButtonState.NORMAL
    assert registry.button_at(Position(0, 0)) is replacement
    assert not registry.has_focus()
    assert _focused_buttons(registry) == []


def test_add_blurs_a_button_that_arrives_focused() -> None:
    registry = _grid(1, 1)
    stray = _button(0, 1, state=ButtonState.FOCUSED)
    registry.add(stray)
    assert stray.state is ButtonState.NORMAL
    assert _focused_buttons(registry) == [registry.button_at(Position(0, 0))]


def test_blur_and_clear() -> None:
    registry = _grid(2, 2)
    registry.blur()
    assert not registry.has_focus()
    assert _focused_buttons(registry) == []
    registry.blur()

    registry.set_focus(1, 0)
    registry.clear()
    assert len(registry) == 0
    assert registry.history() == []
    assert registry.extent() == (-1, -1)


def test_history_moves_revisited_position_to_the_end() -> None:
    registry = _grid(1, 2)
    registry.set_focus(0, 1)
    registry.set_focus(0, 0)
    assert registry.history() == [Position(0, 1), Position(0, 0)]

    registry.clear_history()
    assert registry.history() == []


def test_history_is_capped() -> None:
    registry = _grid(6, 10)
    positions = registry.all_positions()
    for pos in positions:
        registry.set_focus(pos.row, pos.column)

    history = registry.history()
    assert len(history) == HISTORY_LIMIT == 50
    assert history == positions[-HISTORY_LIMIT:]


def test_queries_are_row_major() -> None:
    registry = FocusRegistry([_button(1, 0), _button(0, 3), _button(0, 1)])
    registry.button_at(Position(0, 3)).disable()

    assert registry.all_positions() == [Position(0, 1), Position(0, 3), Position(1, 0)]
    assert registry.interactive_positions() == [Position(0, 1), Position(1, 0)]
    assert [pos for pos, _ in registry.buttons()] == registry.all_positions()
    assert registry.extent() == (1, 3)
