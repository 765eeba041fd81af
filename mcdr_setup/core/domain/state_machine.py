"""
L1 Domain — Installation state machine (pure).

Combines a probe snapshot into one of five installer states and maps
each state to the actions the operator may pick.  Everything is derived
fresh on every run; nothing is stored.

    NEED_INTERPRETER     interpreter not found (or too old)
    NEED_PACKAGE         interpreter ok, package not installed
    READY_OUTDATED       interpreter ok, package older than published
    READY_UNINITIALIZED  interpreter ok, package current, no markers
    READY_CURRENT        interpreter ok, package current, initialized
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from mcdr_setup.core.domain.version import Version
from mcdr_setup.core.errors import ProbeToolMissingError
from mcdr_setup.core.models.action import ActionKind, OfferedAction
from mcdr_setup.core.models.probe import (
    InitializationStatus,
    PackageState,
    ProbeSnapshot,
)


class InstallerState(str, Enum):
    NEED_INTERPRETER = "need_interpreter"
    NEED_PACKAGE = "need_package"
    READY_UNINITIALIZED = "ready_uninitialized"
    READY_OUTDATED = "ready_outdated"
    READY_CURRENT = "ready_current"


@dataclass(frozen=True)
class InstallPlan:
    """The derived state and the actions offered for it."""

    state: InstallerState
    snapshot: ProbeSnapshot
    actions: tuple[OfferedAction, ...]
    candidates: tuple[Version, ...] = ()

    def offers(self, kind: ActionKind) -> bool:
        return any(action.kind is kind for action in self.actions)

    def action(self, kind: ActionKind) -> OfferedAction | None:
        for action in self.actions:
            if action.kind is kind:
                return action
        return None


def derive_state(snapshot: ProbeSnapshot) -> InstallerState:
    """Classify a snapshot into one installer state.

    Raises:
        ProbeToolMissingError: If the package probe had no tool to run.
    """
    package = snapshot.package
    if package is not None and package.state is PackageState.PROBE_TOOL_MISSING:
        raise ProbeToolMissingError("pip is not available; no package action is possible")

    if not snapshot.interpreter.found:
        return InstallerState.NEED_INTERPRETER

    if package is None or package.state is PackageState.NOT_FOUND:
        return InstallerState.NEED_PACKAGE
    if package.state is PackageState.OUTDATED:
        return InstallerState.READY_OUTDATED
    if snapshot.initialization is InitializationStatus.NOT_INITIALIZED:
        return InstallerState.READY_UNINITIALIZED
    return InstallerState.READY_CURRENT


def offered_actions(
    state: InstallerState,
    snapshot: ProbeSnapshot,
    *,
    candidates: tuple[Version, ...] = (),
    require_upgrade_before_init: bool = False,
) -> tuple[OfferedAction, ...]:
    """Return the actions legal in ``state``, in menu order."""
    if state is InstallerState.NEED_INTERPRETER:
        # Without a compatible release there is nothing to download
        if not candidates:
            return ()
        return (OfferedAction(ActionKind.INSTALL_INTERPRETER, version_choices=candidates),)

    if state is InstallerState.NEED_PACKAGE:
        return (OfferedAction(ActionKind.INSTALL_PACKAGE, asks_initialize=True),)

    actions: list[OfferedAction] = []
    uninitialized = snapshot.initialization is InitializationStatus.NOT_INITIALIZED
    if state is InstallerState.READY_OUTDATED:
        if uninitialized and not require_upgrade_before_init:
            actions.append(OfferedAction(ActionKind.INITIALIZE_PACKAGE))
        actions.append(OfferedAction(ActionKind.UPGRADE_PACKAGE))
    elif state is InstallerState.READY_UNINITIALIZED:
        actions.append(OfferedAction(ActionKind.INITIALIZE_PACKAGE))

    actions.append(OfferedAction(ActionKind.MANAGE_MODULES, asks_modules=True))
    actions.append(OfferedAction(ActionKind.OPEN_CONSOLE))
    return tuple(actions)


def build_plan(
    snapshot: ProbeSnapshot,
    *,
    candidates: tuple[Version, ...] = (),
    require_upgrade_before_init: bool = False,
) -> InstallPlan:
    """Derive the state and its offered actions in one step."""
    state = derive_state(snapshot)
    actions = offered_actions(
        state,
        snapshot,
        candidates=candidates,
        require_upgrade_before_init=require_upgrade_before_init,
    )
    return InstallPlan(
        state=state,
        snapshot=snapshot,
        actions=actions,
        candidates=candidates if state is InstallerState.NEED_INTERPRETER else (),
    )
