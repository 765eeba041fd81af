"""
Data models — plain records passed between layers.

Re-exported here so callers can ``from mcdr_setup.core.models import ...``.
"""

from mcdr_setup.core.models.action import (
    ActionKind,
    ActionRequest,
    ErrorKind,
    OfferedAction,
    Receipt,
)
from mcdr_setup.core.models.menu import MenuItem, MenuSpec, StatusLine
from mcdr_setup.core.models.probe import (
    CommandOutput,
    DirectoryStatus,
    InitializationStatus,
    InterpreterState,
    InterpreterStatus,
    PackageState,
    PackageStatus,
    ProbeSnapshot,
)
from mcdr_setup.core.models.registry import (
    PackageMetadata,
    PyPIDocument,
    RemoteVersionEntry,
)

__all__ = [
    "ActionKind",
    "ActionRequest",
    "CommandOutput",
    "DirectoryStatus",
    "ErrorKind",
    "InitializationStatus",
    "InterpreterState",
    "InterpreterStatus",
    "MenuItem",
    "MenuSpec",
    "OfferedAction",
    "PackageMetadata",
    "PackageState",
    "PackageStatus",
    "ProbeSnapshot",
    "PyPIDocument",
    "Receipt",
    "RemoteVersionEntry",
    "StatusLine",
]
