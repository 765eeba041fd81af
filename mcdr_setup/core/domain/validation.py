"""
L1 Domain — Action request validation (pure).

Checks that what the operator picked is legal for the current plan
before anything is dispatched.
"""

from __future__ import annotations

import re

from mcdr_setup.core.domain.state_machine import InstallPlan
from mcdr_setup.core.models.action import ActionKind, ActionRequest

# One or more space-separated requirement tokens, e.g. "numpy requests>=2".
# Same language as ^([token]+ *)+$ without the nested quantifier.
MODULE_LIST_RE = re.compile(r"[0-9A-Za-z.*~=><\[\]][0-9A-Za-z.*~=><\[\] ]*")


def validate_modules(modules: str | None) -> bool:
    """True when ``modules`` is a safe, non-blank requirement list."""
    if not modules:
        return False
    return MODULE_LIST_RE.fullmatch(modules) is not None


def split_modules(modules: str) -> list[str]:
    """Split a validated module list into pip arguments."""
    return [token for token in modules.split(" ") if token]


def validate_request(request: ActionRequest, plan: InstallPlan) -> str | None:
    """Validate ``request`` against ``plan``.

    Returns:
        An error message, or ``None`` if the request may be dispatched.
    """
    offered = plan.action(request.kind)
    if offered is None:
        return f"Action '{request.kind.value}' is not available in state '{plan.state.value}'"

    if request.kind is ActionKind.INSTALL_INTERPRETER:
        if request.version is None:
            return "An interpreter version must be selected"
        if request.version not in offered.version_choices:
            return f"Version {request.version} was not offered"

    if request.kind is ActionKind.MANAGE_MODULES:
        if not validate_modules(request.modules):
            return "Invalid module list"

    return None
