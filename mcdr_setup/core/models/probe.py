"""
Probe models — classified environment status.

Each status is derived once per run from a single probe and never
persisted.  ``ProbeSnapshot`` bundles them for the state machine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from mcdr_setup.core.domain.version import Version


class InterpreterState(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    OUTDATED = "outdated"


class PackageState(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    OUTDATED = "outdated"
    PROBE_TOOL_MISSING = "probe_tool_missing"


class InitializationStatus(str, Enum):
    INITIALIZED = "initialized"
    NOT_INITIALIZED = "not_initialized"


class DirectoryStatus(str, Enum):
    EMPTY = "empty"
    NON_EMPTY = "non_empty"


@dataclass(frozen=True)
class CommandOutput:
    """Raw result of a probe command.

    ``tool_missing`` is set when the executable could not be started at
    all, which is different from it running and exiting nonzero.
    """

    exit_code: int | None
    stdout: str = ""
    tool_missing: bool = False

    @property
    def ok(self) -> bool:
        return not self.tool_missing and self.exit_code == 0


@dataclass(frozen=True)
class InterpreterStatus:
    state: InterpreterState
    version: Version | None = None

    @property
    def found(self) -> bool:
        return self.state is InterpreterState.FOUND


@dataclass(frozen=True)
class PackageStatus:
    state: PackageState
    version: Version | None = None   # set for FOUND and OUTDATED


@dataclass(frozen=True)
class ProbeSnapshot:
    """Everything the probes learned about the host in this run."""

    interpreter: InterpreterStatus
    package: PackageStatus | None = None   # not probed without an interpreter
    initialization: InitializationStatus = InitializationStatus.NOT_INITIALIZED
    directory: DirectoryStatus = DirectoryStatus.EMPTY
