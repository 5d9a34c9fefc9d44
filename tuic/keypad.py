from __future__ import annotations

from dataclasses import dataclass

from .button_state import ButtonKind
from .focus import Button, FocusRegistry, Position

KEYPAD_ROWS = 5
KEYPAD_COLUMNS = 4


@dataclass(frozen=True, slots=True)
class KeySpec:
    label: str
    value: str
    kind: ButtonKind
    row: int
    column: int


_N = ButtonKind.NUMBER
_O = ButtonKind.OPERATOR
_S = ButtonKind.SPECIAL

# Cell (4, 3) is intentionally left empty.
CALCULATOR_KEYS: tuple[KeySpec, ...] = (
    KeySpec("C", "C", _S, 0, 0),
    KeySpec("CE", "CE", _S, 0, 1),
    KeySpec("←", "backspace", _S, 0, 2),
    KeySpec("÷", "/", _O, 0, 3),
    KeySpec("7", "7", _N, 1, 0),
    KeySpec("8", "8", _N, 1, 1),
    KeySpec("9", "9", _N, 1, 2),
    KeySpec("×", "*", _O, 1, 3),
    KeySpec("4", "4", _N, 2, 0),
    KeySpec("5", "5", _N, 2, 1),
    KeySpec("6", "6", _N, 2, 2),
    KeySpec("-", "-", _O, 2, 3),
    KeySpec("1", "1", _N, 3, 0),
    KeySpec("2", "2", _N, 3, 1),
    KeySpec("3", "3", _N, 3, 2),
    KeySpec("+", "+", _O, 3, 3),
    KeySpec("0", "0", _N, 4, 0),
    KeySpec(".", ".", _N, 4, 1),
    KeySpec("=", "=", _S, 4, 2),
)


def build_buttons(keys: tuple[KeySpec, ...] = CALCULATOR_KEYS) -> list[Button]:
    return [
        Button(label=k.label, value=k.value, kind=k.kind, position=Position(k.row, k.column))
        for k in keys
    ]


def build_keypad_registry(keys: tuple[KeySpec, ...] = CALCULATOR_KEYS) -> FocusRegistry:
    """Registry for the keypad; the first key added, (0, 0), starts focused."""
    return FocusRegistry(build_buttons(keys))
