"""
Menu models — an immutable description of what the operator sees.

Built once from the computed install plan.  The terminal UI only reads
it and hands back an ``ActionRequest`` (or ``None`` when the operator
exits).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from mcdr_setup.core.models.action import OfferedAction

Severity = Literal["ok", "info", "warn", "error"]


@dataclass(frozen=True)
class StatusLine:
    text: str
    severity: Severity = "info"
    indent: int = 1


@dataclass(frozen=True)
class MenuItem:
    label: str
    action: OfferedAction


@dataclass(frozen=True)
class MenuSpec:
    """Title, detected status, and the actions on offer."""

    title_lines: tuple[str, ...]
    status: tuple[StatusLine, ...]
    items: tuple[MenuItem, ...]
    exit_label: str

    def find(self, label: str) -> MenuItem | None:
        for item in self.items:
            if item.label == label:
                return item
        return None
