"""
Install operations — the side effects the wizard can perform.

Each operation runs external commands through the shell adapter and
returns a single Receipt.  Multi-step operations stop at the first
failed step and return its receipt.

Progress messages go through ``notify(key, **params)`` so the terminal
UI can localize them; the default just logs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from mcdr_setup.adapters.shell.command import ShellCommandAdapter
from mcdr_setup.core.config.loader import WizardConfig
from mcdr_setup.core.domain.validation import split_modules
from mcdr_setup.core.domain.version import Version
from mcdr_setup.core.models.action import Receipt
from mcdr_setup.core.services.download import ProgressCallback, download_file

logger = logging.getLogger(__name__)

Notifier = Callable[..., None]

LAUNCHER_SCRIPT = """
@echo off
set JAVA_TOOL_OPTIONS=-Dfile.encoding=UTF-8
python -m {module}
pause
"""


def _log_notice(key: str, **params: Any) -> None:
    logger.info("%s %s", key, params or "")


class Operations:
    """Side-effecting operations bound to one working directory.

    Args:
        shell: Command adapter (its cwd should be ``directory``).
        config: Wizard configuration.
        directory: Working directory where the server lives.
        notify: Progress message sink, called as ``notify(key, **params)``.
        on_download_progress: Byte-level progress sink for downloads.
    """

    def __init__(
        self,
        shell: ShellCommandAdapter,
        config: WizardConfig,
        directory: Path,
        *,
        notify: Notifier | None = None,
        on_download_progress: ProgressCallback | None = None,
    ):
        self.shell = shell
        self.config = config
        self.directory = directory
        self._notify = notify or _log_notice
        self._on_download_progress = on_download_progress

    # ── Interpreter ─────────────────────────────────────────────

    def install_interpreter(self, version: Version) -> Receipt:
        """Download the official installer for ``version`` and run it."""
        installer = self.directory / self.config.installer_filename
        self._notify("perform.download_interpreter", version=str(version))

        receipt = download_file(
            self.config.installer_url(str(version)),
            installer,
            on_progress=self._on_download_progress,
        )
        if receipt.failed:
            return receipt

        try:
            receipt = self.shell.execute(str(installer), self.config.installer_args)
        finally:
            try:
                installer.unlink(missing_ok=True)
            except OSError as e:
                logger.warning("Could not remove %s: %s", installer, e)
        return receipt

    # ── Package ─────────────────────────────────────────────────

    def install_package(self) -> Receipt:
        """Point pip at the mirror and install (or upgrade) the package."""
        self._notify("perform.install_package", package=self.config.package_name)
        pip = self.config.pip_command

        receipt = self.shell.execute(
            pip, ["config", "set", "global.index-url", self.config.pip_index_url]
        )
        if receipt.failed:
            return receipt
        return self.shell.execute(pip, ["install", self.config.package_name, "-U"])

    def upgrade_package(self) -> Receipt:
        return self.install_package()

    def initialize_package(self) -> Receipt:
        """Run the package's ``init`` and write a launcher script."""
        self._notify("perform.initialize_package", package=self.config.package_name)
        receipt = self.shell.execute(
            self.config.interpreter_command, ["-m", self.config.package_name, "init"]
        )
        if receipt.failed:
            return receipt

        launcher = self.directory / self.config.launcher_filename
        try:
            launcher.write_text(
                LAUNCHER_SCRIPT.format(module=self.config.package_name),
                encoding="utf-8",
            )
        except OSError as e:
            return Receipt.failure(
                operation=f"write {launcher.name}",
                error=f"Failed to act: {e}",
                error_kind="io_failure",
            )
        logger.info("Wrote launcher %s", launcher)
        return receipt

    # ── Modules ─────────────────────────────────────────────────

    def install_modules(self, modules: str) -> Receipt:
        """``python -m pip install -U`` a validated module list."""
        self._notify("perform.install_modules", modules=modules)
        return self.shell.execute(
            self.config.interpreter_command,
            ["-m", "pip", "install", "-U", *split_modules(modules)],
        )

    # ── Console ─────────────────────────────────────────────────

    def open_console(self) -> Receipt:
        """Open a new terminal window in the working directory."""
        command, *args = self.config.console_command
        return self.shell.spawn(command, args)
