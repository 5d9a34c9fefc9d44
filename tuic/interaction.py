"""Input classification and dispatch for the keypad.

Key events arrive as plain strings (``"up"``, ``"shift+tab"``, ``"7"``, ...),
pointer events as pixel coordinates.  Each handled event produces one
``ButtonAction`` describing what happened; unhandled events produce ``None``
and leave the registry untouched.

The dispatcher is the boundary where core failures stop: a blocked move or a
denied state transition simply means the input had no effect.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .errors import FocusError, InvalidTransitionError
from .focus import Button, FocusRegistry, Position
from .navigation import Direction, FocusNavigator
from .tab_order import TabTraversal

logger = logging.getLogger(__name__)


class KeyClass(str, Enum):
    NAVIGATION = "navigation"
    ACTIVATION = "activation"
    TAB = "tab"
    ESCAPE = "escape"
    PAGE = "page"
    DIRECT_VALUE = "direct_value"
    UNRECOGNIZED = "unrecognized"


class ActionType(str, Enum):
    NAVIGATE = "navigate"
    ACTIVATE = "activate"
    BLUR = "blur"
    DIRECT = "direct"


@dataclass(frozen=True, slots=True)
class ButtonAction:
    type: ActionType
    button: Button | None
    value: str
    position: Position | None


class PositionLocator(Protocol):
    def position_at(self, x: int, y: int) -> Position | None: ...


NAVIGATION_KEYS: dict[str, Direction] = {
    "up": Direction.UP,
    "k": Direction.UP,
    "down": Direction.DOWN,
    "j": Direction.DOWN,
    "left": Direction.LEFT,
    "h": Direction.LEFT,
    "right": Direction.RIGHT,
    "l": Direction.RIGHT,
}

ACTIVATION_KEYS = frozenset({"enter", "return", " ", "space"})

# Value is ``reverse``.
TAB_KEYS: dict[str, bool] = {"tab": False, "shift+tab": True}

ESCAPE_KEYS = frozenset({"esc", "escape"})

PAGE_KEYS: dict[str, str] = {
    "home": "home",
    "end": "end",
    "pgup": "page_up",
    "pageup": "page_up",
    "pgdown": "page_down",
    "pagedown": "page_down",
}

KEY_ALIASES: dict[str, str] = {
    "x": "*",
    "X": "*",
    "×": "*",
    "÷": "/",
    "c": "C",
    "=": "=",
    "backspace": "backspace",
    "delete": "CE",
}


def classify_key(key: str) -> KeyClass:
    if key in NAVIGATION_KEYS:
        return KeyClass.NAVIGATION
    if key in ACTIVATION_KEYS:
        return KeyClass.ACTIVATION
    if key in TAB_KEYS:
        return KeyClass.TAB
    if key in ESCAPE_KEYS:
        return KeyClass.ESCAPE
    if key in PAGE_KEYS:
        return KeyClass.PAGE
    if key in KEY_ALIASES or (len(key) == 1 and key.isprintable()):
        return KeyClass.DIRECT_VALUE
    return KeyClass.UNRECOGNIZED


def key_matches(key: str, button: Button) -> bool:
    if button.value == key or button.label == key:
        return True
    alias = KEY_ALIASES.get(key)
    return alias is not None and button.value == alias


class InteractionDispatcher:
    def __init__(
        self,
        registry: FocusRegistry,
        navigator: FocusNavigator | None = None,
        *,
        locator: PositionLocator | None = None,
    ) -> None:
        self._registry = registry
        self._navigator = navigator if navigator is not None else FocusNavigator(registry)
        self._tabs = TabTraversal(registry)
        self._locator = locator

    @property
    def registry(self) -> FocusRegistry:
        return self._registry

    @property
    def navigator(self) -> FocusNavigator:
        return self._navigator

    def set_locator(self, locator: PositionLocator | None) -> None:
        self._locator = locator

    def handle_key_event(self, key: str) -> ButtonAction | None:
        kind = classify_key(key)
        if kind is KeyClass.UNRECOGNIZED:
            return None
        with self._registry.lock:
            try:
                return self._dispatch_key(kind, key)
            except InvalidTransitionError as exc:
                logger.debug("key %r ignored: %s", key, exc)
                return None
            except FocusError as exc:
                logger.debug("key %r had no effect: %s", key, exc)
                return None

    def handle_pointer_event(self, x: int, y: int) -> ButtonAction | None:
        if self._locator is None:
            return None
        position = self._locator.position_at(x, y)
        if position is None:
            return None
        with self._registry.lock:
            button = self._registry.button_at(position)
            if button is None or not button.is_interactive:
                return None
            try:
                self._registry.set_focus(position.row, position.column)
                return self._activate(button, ActionType.ACTIVATE)
            except FocusError as exc:
                logger.debug("click at %s ignored: %s", position, exc)
                return None

    def activate_focused(self) -> ButtonAction | None:
        return self.handle_key_event("enter")

    def _dispatch_key(self, kind: KeyClass, key: str) -> ButtonAction | None:
        if kind is KeyClass.NAVIGATION:
            direction = NAVIGATION_KEYS[key]
            self._navigator.move_focus(direction)
            return self._navigation_action(f"moved_{direction.value}")

        if kind is KeyClass.ACTIVATION:
            button = self._registry.focused_button()
            if button is None:
                return None
            return self._activate(button, ActionType.ACTIVATE)

        if kind is KeyClass.TAB:
            had_focus = self._registry.has_focus()
            self._tabs.advance(reverse=TAB_KEYS[key])
            return self._navigation_action("tab" if had_focus else "tab_first")

        if kind is KeyClass.ESCAPE:
            button = self._registry.focused_button()
            if button is None:
                return None
            position = self._registry.focused_position()
            self._registry.blur()
            return ButtonAction(ActionType.BLUR, button, "escape", position)

        if kind is KeyClass.PAGE:
            detail = PAGE_KEYS[key]
            if detail == "home":
                self._navigator.focus_first()
            elif detail == "end":
                self._navigator.focus_last()
            elif detail == "page_up":
                self._navigator.page(Direction.UP)
            else:
                self._navigator.page(Direction.DOWN)
            return self._navigation_action(detail)

        if kind is KeyClass.DIRECT_VALUE:
            for position, button in self._registry.buttons():
                if button.is_interactive and key_matches(key, button):
                    self._registry.set_focus(position.row, position.column)
                    return self._activate(button, ActionType.DIRECT)
            return None

        return None

    def _navigation_action(self, detail: str) -> ButtonAction:
        return ButtonAction(
            ActionType.NAVIGATE,
            self._registry.focused_button(),
            detail,
            self._registry.focused_position(),
        )

    def _activate(self, button: Button, action_type: ActionType) -> ButtonAction:
        position = button.position
        button.press()
        # No hold: the visible press is an animation concern of the renderer.
        button.release()
        if self._registry.focused_position() == position:
            self._registry.set_focus(position.row, position.column)
        return ButtonAction(action_type, button, button.value, position)


def help_lines() -> list[str]:
    return [
        "Keyboard Controls",
        "  Arrows / h j k l   move focus",
        "  Enter / Space      activate focused button",
        "  Tab / Shift+Tab    next / previous button",
        "  Home / End         first / last button",
        "  PgUp / PgDn        jump three rows",
        "  Esc                clear focus",
        "",
        "Direct Keys",
        "  0-9 .              digits",
        "  + - * /  x X       operators (x = multiply)",
        "  =                  evaluate",
        "  c C  Delete        clear / clear entry",
        "  Backspace          delete last character",
        "",
        "F1: toggle help   Q: quit",
    ]
