"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from mcdr_setup.core import context, i18n
from mcdr_setup.core.config.loader import CONFIG_ENV_VAR, WizardConfig

from tests.fakes import FakeShell


@pytest.fixture(autouse=True)
def _english(monkeypatch: pytest.MonkeyPatch):
    """Every test starts in English with no config override."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    i18n.set_locale("en")
    yield
    i18n.set_locale("en")
    context.reset()


@pytest.fixture
def config() -> WizardConfig:
    return WizardConfig()


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """An empty server directory."""
    directory = tmp_path / "server"
    directory.mkdir()
    context.set_working_dir(directory)
    return directory


@pytest.fixture
def make_shell():
    """Factory for FakeShell instances."""
    return FakeShell
