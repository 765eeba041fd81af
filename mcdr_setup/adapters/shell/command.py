"""
Shell command adapter — run external commands for probes and actions.

Probes capture stdout so it can be classified.  Actions let stdout pass
straight through to the operator's terminal and report a Receipt.
Nothing here raises for a failed command.
"""

from __future__ import annotations

import logging
import subprocess
import time
from pathlib import Path
from typing import Sequence

from mcdr_setup.core.models.action import Receipt
from mcdr_setup.core.models.probe import CommandOutput

logger = logging.getLogger(__name__)


class ShellCommandAdapter:
    """Execute commands on the host.

    Args:
        cwd: Working directory for every command (default: process cwd).
    """

    def __init__(self, cwd: Path | None = None):
        self._cwd = cwd

    @property
    def cwd(self) -> Path | None:
        return self._cwd

    def probe(self, command: str, args: Sequence[str] = ()) -> CommandOutput:
        """Run a read-only probe and capture its stdout."""
        argv = [command, *args]
        logger.debug("Probing: %s", " ".join(argv))
        try:
            result = subprocess.run(
                argv,
                cwd=self._cwd,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError as e:
            logger.debug("Probe tool unavailable: %s (%s)", command, e)
            return CommandOutput(exit_code=None, tool_missing=True)

        logger.debug("Probe %s exited %d", command, result.returncode)
        return CommandOutput(exit_code=result.returncode, stdout=result.stdout or "")

    def execute(self, command: str, args: Sequence[str] = ()) -> Receipt:
        """Run a command to completion, passing its output through."""
        argv = [command, *args]
        operation = " ".join(argv)
        logger.info("Executing: %s", operation)
        start = time.monotonic()

        try:
            result = subprocess.run(argv, cwd=self._cwd)
        except OSError as e:
            return Receipt.failure(
                operation=operation,
                error=f"Failed to act: {e}",
                error_kind="io_failure",
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if result.returncode != 0:
            return Receipt.failure(
                operation=operation,
                error=f"Failed to act: executor returned non-zero code {result.returncode}",
                error_kind="non_zero_exit",
                exit_code=result.returncode,
                duration_ms=elapsed_ms,
            )
        return Receipt.success(operation=operation, exit_code=0, duration_ms=elapsed_ms)

    def spawn(self, command: str, args: Sequence[str] = ()) -> Receipt:
        """Start a command without waiting for it."""
        argv = [command, *args]
        operation = " ".join(argv)
        logger.info("Spawning: %s", operation)
        try:
            subprocess.Popen(argv, cwd=self._cwd)
        except OSError as e:
            return Receipt.failure(
                operation=operation,
                error=f"Failed to start child process: {e}",
                error_kind="io_failure",
            )
        return Receipt.success(operation=operation)
