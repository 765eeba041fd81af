"""
Configuration loader — reads mcdr-setup.yml into a WizardConfig.

The file is optional: without it every setting keeps its default,
which points at the public mirrors the wizard was built for.  The path
can be overridden with the ``MCDR_SETUP_CONFIG`` environment variable.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from mcdr_setup.core.errors import ConfigError

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "mcdr-setup.yml"
CONFIG_ENV_VAR = "MCDR_SETUP_CONFIG"

__all__ = [
    "CONFIG_FILE",
    "ConfigError",
    "WizardConfig",
    "find_config_file",
    "load_config",
]


class WizardConfig(BaseModel):
    """Everything the wizard needs to know about the outside world."""

    # ── Target package ───────────────────────────────────────────
    package_name: str = "mcdreforged"
    metadata_url: str = "https://mirrors.bfsu.edu.cn/pypi/web/json/mcdreforged"
    pip_index_url: str = "https://mirrors.bfsu.edu.cn/pypi/web/simple"

    # ── Interpreter catalog ──────────────────────────────────────
    catalog_url: str = "https://registry.npmmirror.com/-/binary/python/"
    installer_url_template: str = (
        "https://registry.npmmirror.com/-/binary/python/{version}/python-{version}-amd64.exe"
    )
    installer_filename: str = "python-installer.exe"
    installer_args: list[str] = Field(
        default_factory=lambda: [
            "InstallAllUsers=0",
            "PrependPath=1",
            "Include_test=0",
            "SimpleInstall=1",
        ]
    )
    major_line: str = "3"

    # ── Local commands ───────────────────────────────────────────
    interpreter_command: str = "python"
    pip_command: str = "pip"
    console_command: list[str] = Field(default_factory=lambda: ["cmd", "/c", "start", "cmd"])

    # ── Initialization ───────────────────────────────────────────
    marker_files: list[str] = Field(default_factory=lambda: ["permission.yml", "config.yml"])
    launcher_filename: str = "start.bat"

    # ── Behaviour ────────────────────────────────────────────────
    promote_previous_minor: bool = True
    require_upgrade_before_init: bool = False
    locale: str | None = None   # None = detect from the system

    def installer_url(self, version: str) -> str:
        return self.installer_url_template.format(version=version)


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Locate the config file: env override first, then the working dir."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()

    candidate = (start_dir or Path.cwd()) / CONFIG_FILE
    if candidate.is_file():
        return candidate
    return None


def load_config(path: Path | None = None) -> WizardConfig:
    """Load and validate the wizard configuration.

    Args:
        path: Explicit config path.  If None, uses :func:`find_config_file`.

    Returns:
        Validated WizardConfig (defaults when no file exists).

    Raises:
        ConfigError: If the file is unreadable or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE)
        return WizardConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading wizard config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return WizardConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = WizardConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid wizard configuration: {e}") from e

    logger.info("Loaded wizard config for package '%s'", config.package_name)
    return config
