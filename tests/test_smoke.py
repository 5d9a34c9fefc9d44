"""Smoke tests for the pygame UI.

These tests verify that the calculator's main loop can initialise and execute
a handful of frames without crashing when the SDL dummy video driver is used.
They do not check rendering correctness; they only make sure the integration
points between pygame and the application do not raise in a headless
environment.
"""

from __future__ import annotations

import os

# Use the dummy drivers before importing pygame or the application
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")


def test_app_runs_headless() -> None:
    """Ensure the application can start and run a few frames headlessly."""
    # Import inside the test so that environment variables take effect
    from tuic.app import run
    from tuic.config import CalculatorConfig

    exit_code = run(max_frames=3, config=CalculatorConfig())
    assert exit_code == 0


def test_main_entry_point_uses_run(monkeypatch) -> None:
    import tuic.__main__ as entry

    monkeypatch.setattr(entry, "run", lambda: 7)
    assert entry.main() == 7
