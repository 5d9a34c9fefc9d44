"""Pygame UI shell for the tuic calculator.

The keypad, focus handling and arithmetic live in the headless core modules
(``focus``, ``navigation``, ``interaction``, ``calculator``).  This module only
translates pygame events into key strings and pixel coordinates, feeds them to
the ``InteractionDispatcher`` and draws whatever state comes back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

import pygame

from .button_state import ButtonKind, ButtonState
from .calculator import CalculatorSession
from .clock import Clock, PressFlash, RealClock
from .config import CalculatorConfig
from .focus import Button, FocusRegistry
from .interaction import ActionType, ButtonAction, InteractionDispatcher, help_lines
from .keypad import KEYPAD_COLUMNS, KEYPAD_ROWS, build_keypad_registry
from .layout import GridLayout
from .logging_utils import configure_logging
from .navigation import FocusNavigator

logger = logging.getLogger(__name__)

TARGET_FPS = 60


class Screen(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def render(self, surface: pygame.Surface) -> None: ...


class App:
    def __init__(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        self._surface = surface
        self._font = font
        self._screens: list[Screen] = []
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    @property
    def font(self) -> pygame.font.Font:
        return self._font

    @property
    def top(self) -> Screen | None:
        return self._screens[-1] if self._screens else None

    def push(self, screen: Screen) -> None:
        self._screens.append(screen)

    def pop(self) -> None:
        # The calculator is the root screen; it is never popped.
        if len(self._screens) > 1:
            self._screens.pop()

    def quit(self) -> None:
        self._running = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.quit()
            return
        if not self._screens:
            return
        self._screens[-1].handle_event(event)

    def render(self) -> None:
        if not self._screens:
            return
        self._screens[-1].render(self._surface)


_KEY_NAMES: dict[int, str] = {
    pygame.K_UP: "up",
    pygame.K_DOWN: "down",
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_RETURN: "enter",
    pygame.K_KP_ENTER: "enter",
    pygame.K_SPACE: " ",
    pygame.K_ESCAPE: "esc",
    pygame.K_HOME: "home",
    pygame.K_END: "end",
    pygame.K_PAGEUP: "pgup",
    pygame.K_PAGEDOWN: "pgdown",
    pygame.K_BACKSPACE: "backspace",
    pygame.K_DELETE: "delete",
}


def translate_key(event: pygame.event.Event) -> str | None:
    """Turn a ``KEYDOWN`` event into the key string the dispatcher understands."""
    key = getattr(event, "key", None)
    if key == pygame.K_TAB:
        mods = int(getattr(event, "mod", 0))
        return "shift+tab" if mods & pygame.KMOD_SHIFT else "tab"
    name = _KEY_NAMES.get(key)
    if name is not None:
        return name
    text = getattr(event, "unicode", "")
    if isinstance(text, str) and len(text) == 1 and text.isprintable():
        return text
    return None


def _fit_tail(font: pygame.font.Font, text: str, max_width: int) -> str:
    """Clip from the left so the end of a long expression stays visible."""
    if max_width <= 0:
        return ""
    if font.size(text)[0] <= max_width:
        return text
    clipped = text
    while clipped and font.size(f"...{clipped}")[0] > max_width:
        clipped = clipped[1:]
    return f"...{clipped}" if clipped else "..."


class CalculatorScreen:
    _bg = (3, 9, 78)
    _panel_bg = (8, 18, 104)
    _border = (226, 236, 255)
    _text_main = (238, 245, 255)
    _text_muted = (186, 200, 224)
    _text_error = (255, 128, 128)
    _focus_bg = (244, 248, 255)
    _focus_text = (14, 26, 74)
    _flash_bg = (255, 214, 102)
    _disabled_bg = (34, 38, 64)
    _disabled_text = (96, 104, 136)
    _kind_bg = {
        ButtonKind.NUMBER: (9, 20, 106),
        ButtonKind.OPERATOR: (22, 50, 136),
        ButtonKind.SPECIAL: (52, 26, 104),
    }

    def __init__(self, app: App, *, config: CalculatorConfig, clock: Clock) -> None:
        self._app = app
        self._registry = build_keypad_registry()
        self._navigator = FocusNavigator(
            self._registry,
            wrap_mode=config.wrap_mode,
            wrapping=config.wrapping,
            search_bound=config.search_bound,
        )
        self._layout = GridLayout(rows=KEYPAD_ROWS, columns=KEYPAD_COLUMNS)
        self._dispatcher = InteractionDispatcher(self._registry, self._navigator, locator=self._layout)
        self._session = CalculatorSession()
        self._flash = PressFlash(clock)
        self._last_action: ButtonAction | None = None

        self._display_font = pygame.font.Font(None, 48)
        self._key_font = pygame.font.Font(None, 36)
        self._hint_font = pygame.font.Font(None, 22)

    @property
    def registry(self) -> FocusRegistry:
        return self._registry

    @property
    def session(self) -> CalculatorSession:
        return self._session

    @property
    def layout(self) -> GridLayout:
        return self._layout

    @property
    def last_action(self) -> ButtonAction | None:
        return self._last_action

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_F1:
                self._app.push(HelpScreen(self._app))
                return
            key = translate_key(event)
            if key is None:
                return
            action = self._dispatcher.handle_key_event(key)
            if action is None:
                if key in ("q", "Q"):
                    self._app.quit()
                return
            self._apply(action)
            return

        if event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", 1) == 1:
            x, y = event.pos
            action = self._dispatcher.handle_pointer_event(x, y)
            if action is not None:
                self._apply(action)

    def _apply(self, action: ButtonAction) -> None:
        self._last_action = action
        if action.type in (ActionType.ACTIVATE, ActionType.DIRECT):
            self._session.apply(action.value)
            self._flash.trigger(action.position)
            logger.debug("%s %r -> %r", action.type.value, action.value, self._session.display)

    def _relayout(self, surface: pygame.Surface) -> pygame.Rect:
        w, h = surface.get_size()
        margin = max(10, min(26, w // 30))
        display_h = max(72, min(140, h // 5))
        display = pygame.Rect(margin, margin, max(120, w - margin * 2), display_h)
        keypad_top = display.bottom + margin // 2
        hint_h = 28
        fitted = self._layout.fit(
            x=margin,
            y=keypad_top,
            width=max(1, w - margin * 2),
            height=max(1, h - keypad_top - hint_h),
        )
        if fitted != self._layout:
            self._layout = fitted
            self._dispatcher.set_locator(fitted)
        return display

    def render(self, surface: pygame.Surface) -> None:
        surface.fill(self._bg)
        display = self._relayout(surface)

        pygame.draw.rect(surface, self._panel_bg, display)
        pygame.draw.rect(surface, self._border, display, 2)

        history = self._session.history()
        if history:
            last = _fit_tail(self._hint_font, history[-1], display.w - 24)
            surface.blit(self._hint_font.render(last, True, self._text_muted), (display.x + 12, display.y + 8))

        if self._session.error is not None:
            status = self._hint_font.render(f"Error: {self._session.error}", True, self._text_error)
            surface.blit(status, (display.x + 12, display.bottom - status.get_height() - 8))

        shown = _fit_tail(self._display_font, self._session.display, display.w - 24)
        value = self._display_font.render(shown, True, self._text_main)
        surface.blit(value, value.get_rect(midright=(display.right - 12, display.centery)))

        lit = self._flash.active()
        for position, button in self._registry.buttons():
            self._draw_button(surface, button, flashing=position == lit)

        footer = "Arrows/hjkl: Move  |  Enter: Press  |  Tab: Next  |  F1: Help  |  Q: Quit"
        foot = self._hint_font.render(footer, True, self._text_muted)
        w, h = surface.get_size()
        surface.blit(foot, foot.get_rect(midbottom=(w // 2, h - 6)))

    def _draw_button(self, surface: pygame.Surface, button: Button, *, flashing: bool) -> None:
        rect = pygame.Rect(*self._layout.cell_rect(button.position))
        state = button.state
        if state is ButtonState.DISABLED:
            fill, text_color, edge = self._disabled_bg, self._disabled_text, (62, 70, 110)
        elif flashing or state is ButtonState.PRESSED:
            fill, text_color, edge = self._flash_bg, self._focus_text, self._border
        elif state is ButtonState.FOCUSED:
            fill, text_color, edge = self._focus_bg, self._focus_text, (120, 142, 196)
        else:
            fill, text_color, edge = self._kind_bg[button.kind], self._text_main, (62, 84, 152)

        pygame.draw.rect(surface, fill, rect)
        pygame.draw.rect(surface, edge, rect, 2 if state is ButtonState.FOCUSED else 1)
        label = self._key_font.render(button.label, True, text_color)
        surface.blit(label, label.get_rect(center=rect.center))


class HelpScreen:
    def __init__(self, app: App) -> None:
        self._app = app
        self._line_font = pygame.font.Font(None, 24)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        if event.key in (pygame.K_F1, pygame.K_ESCAPE, pygame.K_BACKSPACE):
            self._app.pop()

    def render(self, surface: pygame.Surface) -> None:
        surface.fill((3, 9, 78))
        lines = help_lines()
        title = self._app.font.render(lines[0], True, (238, 245, 255))
        surface.blit(title, (24, 20))
        y = 20 + title.get_height() + 12
        for line in lines[1:]:
            if line:
                surface.blit(self._line_font.render(line, True, (186, 200, 224)), (24, y))
            y += self._line_font.get_linesize()


def run(
    *,
    max_frames: int | None = None,
    event_injector: Callable[[int], None] | None = None,
    config: CalculatorConfig | None = None,
    clock: Clock | None = None,
) -> int:
    cfg = config if config is not None else CalculatorConfig.from_env()
    configure_logging(cfg.log_level)

    pygame.init()
    pygame.display.set_caption("tuic calculator")
    surface = pygame.display.set_mode(cfg.window_size, pygame.RESIZABLE)

    font = pygame.font.Font(None, 36)
    frame_clock = pygame.time.Clock()

    app = App(surface=surface, font=font)
    app.push(CalculatorScreen(app, config=cfg, clock=clock if clock is not None else RealClock()))
    logger.info("calculator started (wrap=%s, wrapping=%s)", cfg.wrap_mode.value, cfg.wrapping)

    frame = 0
    try:
        while app.running:
            if event_injector is not None:
                event_injector(frame)

            for event in pygame.event.get():
                app.handle_event(event)

            app.render()
            pygame.display.flip()

            frame += 1
            if max_frames is not None and frame >= max_frames:
                break

            frame_clock.tick(TARGET_FPS)
    finally:
        pygame.quit()
        logger.info("calculator stopped after %d frames", frame)

    return 0
