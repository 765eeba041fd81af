"""
Wizard context — the directory the server is being set up in.

Set ONCE at startup by the entry point:

    - CLI:    main.py  → context.set_working_dir(Path.cwd())
    - Tests:  fixtures → context.set_working_dir(tmp_path)

Module-level singleton; ``get_working_dir()`` falls back to the current
directory when nothing was registered.
"""

from __future__ import annotations

from pathlib import Path

_working_dir: Path | None = None


def set_working_dir(directory: Path) -> None:
    """Register the working directory for the current process."""
    global _working_dir
    _working_dir = directory


def get_working_dir() -> Path:
    """Return the registered working directory, or the CWD if unset."""
    return _working_dir if _working_dir is not None else Path.cwd()


def reset() -> None:
    global _working_dir
    _working_dir = None
