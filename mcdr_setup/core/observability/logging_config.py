"""
Logging configuration — set up once by main.py.

Every module does ``logger = logging.getLogger(__name__)`` and inherits
this config.  The terminal belongs to the menu and to pip/installer
output, so console records are tagged ``[mcdr-setup]`` and only
WARNING and above are shown unless asked otherwise:

    MCDR_SETUP_LOG_LEVEL       console level (default WARNING)
    MCDR_SETUP_LOG_FILE        optional log file, appended to per run
    MCDR_SETUP_LOG_FILE_LEVEL  file level (default: console level)

The log file is meant for bug reports: each run starts with an INFO line
naming the version and working directory.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path

from mcdr_setup import __version__

LEVEL_ENV_VAR = "MCDR_SETUP_LOG_LEVEL"
FILE_ENV_VAR = "MCDR_SETUP_LOG_FILE"
FILE_LEVEL_ENV_VAR = "MCDR_SETUP_LOG_FILE_LEVEL"

# ── Format strings ──────────────────────────────────────────────

_PREFIX = "[mcdr-setup]"

_FMT_CONSOLE = f"{_PREFIX} %(levelname)s: %(message)s"
_FMT_CONSOLE_DEBUG = f"{_PREFIX} %(asctime)s %(name)s:%(lineno)d %(levelname)s: %(message)s"
_DATEFMT_CONSOLE = "%H:%M:%S"

_FMT_FILE = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d  %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# asyncio reports slow to_thread callbacks while a download is running
_NOISY_LOGGERS = ("asyncio",)


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if level <= logging.DEBUG:
        handler.setFormatter(logging.Formatter(_FMT_CONSOLE_DEBUG, datefmt=_DATEFMT_CONSOLE))
    else:
        handler.setFormatter(logging.Formatter(_FMT_CONSOLE))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Configure Python logging for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional level for the file, defaults to ``level``.
        quiet_third_party: Keep asyncio at WARNING unless the console
            runs at DEBUG.
    """
    console_level = _parse_level(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_console_handler(console_level))
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root.addHandler(_file_handler(log_file, file_level))
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False

    if log_file:
        logging.getLogger(__name__).info(
            "mcdr-setup %s started in %s", __version__, Path.cwd()
        )


def setup_logging_from_env(environ: Mapping[str, str] | None = None) -> None:
    """Read the ``MCDR_SETUP_LOG_*`` variables and call :func:`setup_logging`."""
    env = os.environ if environ is None else environ
    level = env.get(LEVEL_ENV_VAR, "WARNING")
    setup_logging(
        level=level,
        log_file=env.get(FILE_ENV_VAR) or None,
        log_file_level=env.get(FILE_LEVEL_ENV_VAR) or None,
        quiet_third_party=_parse_level(level) > logging.DEBUG,
    )


def _parse_level(level: str | None) -> int:
    """Level name to numeric constant; unknown names mean WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
