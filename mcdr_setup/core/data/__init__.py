"""
Static data shipped with the wizard — message catalogs.

Catalogs live in ``mcdr_setup/core/data/locales/<locale>.yml`` and are
loaded on first access, then cached for the process lifetime.

Usage::

    from mcdr_setup.core.data import LocaleRegistry

    registry = LocaleRegistry()
    messages = registry.messages("zh-CN")   # flat dict: "menu.exit" -> "退出"
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent
_LOCALE_DIR = _DATA_DIR / "locales"


def _flatten(tree: dict[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested mappings into dotted keys."""
    flat: dict[str, str] = {}
    for key, value in tree.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{dotted}."))
        else:
            flat[dotted] = str(value)
    return flat


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML mapping, or an empty dict when missing or invalid."""
    if not path.exists():
        logger.warning("Data file not found: %s", path)
        return {}
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.warning("Invalid data file %s: %s", path, e)
            return {}
    return data if isinstance(data, dict) else {}


class LocaleRegistry:
    """Lazily loaded message catalogs, keyed by locale name."""

    def __init__(self, locale_dir: Path | None = None):
        self._locale_dir = locale_dir or _LOCALE_DIR
        self._cache: dict[str, dict[str, str]] = {}

    def available(self) -> list[str]:
        """Locale names with a catalog on disk."""
        return sorted(p.stem for p in self._locale_dir.glob("*.yml"))

    def messages(self, locale: str) -> dict[str, str]:
        """Flat message table for ``locale`` (empty if unknown)."""
        if locale not in self._cache:
            catalog = _flatten(_load_yaml(self._locale_dir / f"{locale}.yml"))
            logger.debug("Loaded %d messages for locale %s", len(catalog), locale)
            self._cache[locale] = catalog
        return self._cache[locale]
