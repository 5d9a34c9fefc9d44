from __future__ import annotations

import sys
from pathlib import Path


def _ensure_repo_root_on_path() -> None:
    """Put the parent of this package on ``sys.path`` when run as a plain script."""
    repo_root_str = str(Path(__file__).resolve().parent.parent)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


if __package__:
    # python -m tuic / console script
    from .app import run
else:
    # python tuic/__main__.py
    _ensure_repo_root_on_path()
    from tuic.app import run


def main() -> int:
    """Entry point for the calculator from the command line."""
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
