"""
Click front-end for the wizard.

Draws a MenuSpec, collects the operator's choices and shows progress.
No decisions are made here; see ``core/use_cases/wizard.py``.
"""

from __future__ import annotations

from typing import Any

import click

from mcdr_setup.core.domain.version import Version
from mcdr_setup.core.i18n import t
from mcdr_setup.core.models.action import OfferedAction
from mcdr_setup.core.models.menu import MenuSpec, Severity
from mcdr_setup.core.services.download import ProgressCallback

_ICONS: dict[str, str] = {"ok": "✅", "info": "•", "warn": "⚠️", "error": "❌"}
_COLORS: dict[str, str | None] = {"ok": "green", "info": None, "warn": "yellow", "error": "red"}


class _DownloadBar:
    """Progress sink that opens a click progress bar on the first chunk."""

    def __init__(self, label: str = ""):
        self._label = label
        self._bar: Any = None
        self._seen = 0

    def __call__(self, downloaded: int, total: int | None) -> None:
        if total is None:
            # Unknown size: no bar, just the running byte count
            click.echo(f"\r   {downloaded // 1024} KiB", nl=False)
            return
        if self._bar is None:
            self._bar = click.progressbar(length=total, label=self._label, show_pos=False)
            self._bar.__enter__()
        self._bar.update(downloaded - self._seen)
        self._seen = downloaded
        if downloaded >= total:
            self._bar.__exit__(None, None, None)
            self._bar = None
            self._seen = 0


class ClickUI:
    """Interactive terminal UI built on click prompts."""

    # ── Output ──────────────────────────────────────────────────

    def notice(self, text: str, severity: Severity = "info") -> None:
        click.secho(text, fg=_COLORS.get(severity))

    def fatal(self, text: str) -> None:
        click.echo()
        click.secho(t("fatal").rstrip("\n"), fg="red", bold=True)
        click.secho(text, fg="red")
        self.pause()

    def pause(self) -> None:
        click.pause(info=t("pause"))

    def download_progress(self) -> ProgressCallback | None:
        return _DownloadBar()

    # ── Menu ────────────────────────────────────────────────────

    def render(self, menu: MenuSpec) -> None:
        click.echo()
        for index, line in enumerate(menu.title_lines):
            if index < len(menu.title_lines) - 3:
                click.secho(line, fg="cyan", bold=True)
            else:
                click.echo(line)
        for status in menu.status:
            pad = "  " * status.indent
            icon = _ICONS[status.severity] if status.indent == 1 else " "
            click.secho(f"{pad}{icon} {status.text}", fg=_COLORS.get(status.severity))
        click.echo()
        for number, item in enumerate(menu.items, start=1):
            click.echo(f"  {number}. {item.label}")
        click.echo(f"  0. {menu.exit_label}")

    def show_menu(self, menu: MenuSpec) -> OfferedAction | None:
        self.render(menu)
        choice = click.prompt(
            t("menu.prompt"),
            type=click.IntRange(0, len(menu.items)),
            default=1 if menu.items else 0,
        )
        if choice == 0:
            return None
        return menu.items[choice - 1].action

    def choose_version(self, choices: tuple[Version, ...]) -> Version | None:
        click.echo()
        click.secho(t("menu.config.interpreter_version"), bold=True)
        for number, version in enumerate(choices, start=1):
            click.echo(f"  {number}. {version}")
        click.echo(f"  0. {t('menu.back')}")
        choice = click.prompt(
            t("menu.prompt"),
            type=click.IntRange(0, len(choices)),
            default=1,
        )
        if choice == 0:
            return None
        return choices[choice - 1]

    def confirm(self, text: str, default: bool = True) -> bool:
        return click.confirm(text, default=default)

    def ask_modules(self) -> str:
        return click.prompt(t("menu.modules.input"), default="", show_default=False)
