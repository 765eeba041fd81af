"""
Menu builder — turn an install plan into an immutable MenuSpec.

All text is localized here so the terminal UI only has to draw it.
"""

from __future__ import annotations

from mcdr_setup import __version__
from mcdr_setup.core.domain.state_machine import InstallerState, InstallPlan
from mcdr_setup.core.domain.version import Version, VersionConstraint
from mcdr_setup.core.i18n import t
from mcdr_setup.core.models.action import ActionKind
from mcdr_setup.core.models.menu import MenuItem, MenuSpec, StatusLine
from mcdr_setup.core.models.probe import (
    DirectoryStatus,
    InitializationStatus,
    InterpreterState,
    PackageState,
)

BANNER = r"""
   __  ___________  ___     ____    __
  /  |/  / ___/ _ \/ _ \  / __/__ / /___ _____
 / /|_/ / /__/ // / , _/ _\ \/ -_) __/ // / _ \
/_/  /_/\___/____/_/|_| /___/\__/\__/\_,_/ .__/
                                        /_/
""".strip("\n")

ACTION_LABEL_KEYS: dict[ActionKind, str] = {
    ActionKind.INSTALL_INTERPRETER: "menu.main.install_interpreter",
    ActionKind.INSTALL_PACKAGE: "menu.main.install_package",
    ActionKind.UPGRADE_PACKAGE: "menu.main.upgrade_package",
    ActionKind.INITIALIZE_PACKAGE: "menu.main.initialize_package",
    ActionKind.MANAGE_MODULES: "menu.main.manage_modules",
    ActionKind.OPEN_CONSOLE: "menu.main.open_console",
}


def action_label(kind: ActionKind) -> str:
    return t(ACTION_LABEL_KEYS[kind])


def _status_lines(
    plan: InstallPlan,
    constraint: VersionConstraint,
    latest: Version | None,
) -> list[StatusLine]:
    snapshot = plan.snapshot
    lines: list[StatusLine] = []

    # ── Interpreter ─────────────────────────────────────────────
    interpreter = snapshot.interpreter
    if interpreter.state is InterpreterState.FOUND:
        lines.append(StatusLine(t("check.interpreter.installed", version=interpreter.version), "ok"))
    elif interpreter.state is InterpreterState.OUTDATED:
        lines.append(StatusLine(t("check.interpreter.outdated", version=interpreter.version), "error"))
        lines.append(StatusLine(
            t("check.interpreter.outdated_desc", constraint=constraint), "error", indent=2,
        ))
    else:
        lines.append(StatusLine(t("check.interpreter.not_found"), "warn"))
        lines.append(StatusLine(t("check.interpreter.not_found_desc"), "warn", indent=2))

    if plan.state is InstallerState.NEED_INTERPRETER and not plan.candidates:
        lines.append(StatusLine(t("check.interpreter.no_candidates"), "error"))

    # ── Package ─────────────────────────────────────────────────
    package = snapshot.package
    if package is not None:
        if package.state is PackageState.FOUND:
            lines.append(StatusLine(t("check.package.installed", version=package.version), "ok"))
        elif package.state is PackageState.OUTDATED:
            lines.append(StatusLine(
                t("check.package.outdated", version=package.version, latest=latest or "?"),
                "warn",
            ))
        else:
            lines.append(StatusLine(t("check.package.not_found"), "warn"))

    # ── Working directory ───────────────────────────────────────
    if snapshot.initialization is InitializationStatus.INITIALIZED:
        lines.append(StatusLine(t("check.package.initialized"), "ok"))
    elif snapshot.directory is DirectoryStatus.NON_EMPTY:
        lines.append(StatusLine(t("check.env.not_blank"), "error"))
        lines.append(StatusLine(t("check.env.blank_desc"), "error", indent=2))

    return lines


def build_menu(
    plan: InstallPlan,
    *,
    constraint: VersionConstraint,
    latest: Version | None = None,
) -> MenuSpec:
    """Build the main menu for ``plan``."""
    title = (*BANNER.splitlines(), t("desc", version=__version__), "*", t("check.env.title"))
    items = tuple(MenuItem(action_label(action.kind), action) for action in plan.actions)
    return MenuSpec(
        title_lines=title,
        status=tuple(_status_lines(plan, constraint, latest)),
        items=items,
        exit_label=t("menu.exit"),
    )
