"""
Action and Receipt models — the execution contract.

An ActionRequest is what the operator picked from the menu.  A Receipt
is what an external operation reports back.  Executors never raise:
failures are captured in the Receipt.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field

from mcdr_setup.core.domain.version import Version


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class ActionKind(str, Enum):
    """Every operation the wizard can offer."""

    INSTALL_INTERPRETER = "install_interpreter"
    INSTALL_PACKAGE = "install_package"
    UPGRADE_PACKAGE = "upgrade_package"
    INITIALIZE_PACKAGE = "initialize_package"
    MANAGE_MODULES = "manage_modules"
    OPEN_CONSOLE = "open_console"


@dataclass(frozen=True)
class OfferedAction:
    """An action the current state allows, plus what it needs."""

    kind: ActionKind
    version_choices: tuple[Version, ...] = ()   # INSTALL_INTERPRETER only
    asks_initialize: bool = False                # INSTALL_PACKAGE only
    asks_modules: bool = False                   # MANAGE_MODULES only


@dataclass(frozen=True)
class ActionRequest:
    """The operator's confirmed choice and its bound parameters."""

    kind: ActionKind
    version: Version | None = None
    initialize_after_install: bool = False
    modules: str | None = None


ErrorKind = Literal["non_zero_exit", "io_failure", "transport_failure"]


class Receipt(BaseModel):
    """Result of one external operation."""

    operation: str
    status: Literal["ok", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    error: str | None = None
    error_kind: ErrorKind | None = None
    exit_code: int | None = None

    @property
    def ok(self) -> bool:
        """Whether the operation succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the operation failed."""
        return self.status == "failed"

    @classmethod
    def success(cls, operation: str, **kwargs: Any) -> Receipt:
        """Create a success receipt."""
        return cls(operation=operation, status="ok", **kwargs)

    @classmethod
    def failure(
        cls,
        operation: str,
        error: str,
        error_kind: ErrorKind,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(
            operation=operation,
            status="failed",
            error=error,
            error_kind=error_kind,
            **kwargs,
        )
