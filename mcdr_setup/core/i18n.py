"""
Localization — pick a locale and translate message keys.

Module-level singleton, set once at startup:

    - CLI:    main.py → i18n.set_locale(detect_locale())
    - Tests:  fixtures call i18n.set_locale("en")

Lookup falls back to English, then to the key itself, so a missing
translation never breaks the menu.
"""

from __future__ import annotations

import locale as _locale
import logging
import os
from typing import Any

from mcdr_setup.core.data import LocaleRegistry

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"

_registry = LocaleRegistry()
_current = DEFAULT_LOCALE


def detect_locale() -> str:
    """``zh-CN`` for any Chinese system locale, otherwise English."""
    candidates = [os.environ.get(var, "") for var in ("LC_ALL", "LC_MESSAGES", "LANG")]
    try:
        candidates.append(_locale.getlocale()[0] or "")
    except ValueError:
        pass
    for name in candidates:
        if name.lower().startswith("zh") or name.lower().startswith("chinese"):
            return "zh-CN"
    return DEFAULT_LOCALE


def set_locale(name: str) -> None:
    """Register the locale for the current process."""
    global _current
    if name not in _registry.available():
        logger.warning("Unknown locale '%s', falling back to %s", name, DEFAULT_LOCALE)
        name = DEFAULT_LOCALE
    _current = name


def get_locale() -> str:
    return _current


def t(key: str, **params: Any) -> str:
    """Translate ``key`` and format it with ``params``."""
    template = _registry.messages(_current).get(key)
    if template is None:
        template = _registry.messages(DEFAULT_LOCALE).get(key, key)
    try:
        return template.format(**params)
    except (KeyError, IndexError, ValueError):
        logger.debug("Could not format message %s with %s", key, params)
        return template
