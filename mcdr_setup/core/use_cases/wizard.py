"""
Wizard use case — one full run of the setup wizard.

    1. Fetch package metadata (requires_python, current version)
    2. Probe the environment
    3. Fetch the interpreter catalog when an interpreter is needed
    4. Derive the install plan and show the menu
    5. Collect and validate the operator's request, then dispatch it

The use case owns the flow; everything the operator sees or types goes
through a :class:`WizardUI` so the click front-end and tests can plug in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from mcdr_setup.adapters.shell.command import ShellCommandAdapter
from mcdr_setup.core.config.loader import WizardConfig
from mcdr_setup.core.domain.candidates import catalog_names, select_candidates
from mcdr_setup.core.domain.state_machine import InstallPlan, build_plan
from mcdr_setup.core.domain.version import (
    Version,
    VersionConstraint,
    parse_constraint,
    parse_version,
)
from mcdr_setup.core.errors import (
    EmptyCatalogError,
    FetchError,
    ParseError,
    ProbeToolMissingError,
)
from mcdr_setup.core.i18n import t
from mcdr_setup.core.models.action import (
    ActionKind,
    ActionRequest,
    OfferedAction,
    Receipt,
)
from mcdr_setup.core.models.menu import MenuSpec, Severity
from mcdr_setup.core.services import registry
from mcdr_setup.core.services.dispatcher import ActionDispatcher
from mcdr_setup.core.services.download import ProgressCallback
from mcdr_setup.core.services.menu import build_menu
from mcdr_setup.core.services.operations import Operations
from mcdr_setup.core.services.probe import probe_environment

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

_SUCCESS_KEYS: dict[ActionKind, str] = {
    ActionKind.INSTALL_INTERPRETER: "message.interpreter_installed",
    ActionKind.INSTALL_PACKAGE: "message.package_installed",
    ActionKind.UPGRADE_PACKAGE: "message.package_upgraded",
    ActionKind.INITIALIZE_PACKAGE: "message.package_initialized",
    ActionKind.MANAGE_MODULES: "message.modules_installed",
}


class WizardUI(Protocol):
    """Everything the wizard needs from a front-end."""

    def notice(self, text: str, severity: Severity = "info") -> None: ...

    def show_menu(self, menu: MenuSpec) -> OfferedAction | None:
        """Return the picked action, or ``None`` to exit."""
        ...

    def choose_version(self, choices: tuple[Version, ...]) -> Version | None:
        """Return the picked version, or ``None`` to go back."""
        ...

    def confirm(self, text: str, default: bool = True) -> bool: ...

    def ask_modules(self) -> str:
        """Return the raw module list; empty means go back."""
        ...

    def download_progress(self) -> ProgressCallback | None: ...

    def pause(self) -> None: ...

    def fatal(self, text: str) -> None: ...


@dataclass(frozen=True)
class Survey:
    """What the wizard learned before showing the menu."""

    constraint: VersionConstraint
    latest: Version | None
    plan: InstallPlan
    menu: MenuSpec


# ═══════════════════════════════════════════════════════════════════
#  Survey
# ═══════════════════════════════════════════════════════════════════


def survey(
    config: WizardConfig,
    directory: Path,
    shell: ShellCommandAdapter,
    ui: WizardUI,
) -> Survey:
    """Fetch, probe and plan.

    Raises:
        FetchError: If metadata or the catalog cannot be fetched.
        ParseError: If the published ``requires_python`` is malformed.
        ProbeToolMissingError: If pip is missing altogether.
    """
    ui.notice(t("fetch.metadata", package=config.package_name))
    metadata = registry.fetch_package_metadata(config)

    constraint = parse_constraint(metadata.requires_python)
    try:
        latest = parse_version(metadata.version)
    except ParseError:
        logger.warning("Published version %r is not a valid version", metadata.version)
        latest = None

    snapshot = probe_environment(
        shell, config, directory, constraint=constraint, latest=latest,
    )

    candidates: tuple[Version, ...] = ()
    if not snapshot.interpreter.found:
        ui.notice(t("fetch.catalog"))
        entries = registry.fetch_catalog(config)
        try:
            candidates = tuple(select_candidates(
                catalog_names(entries, config.major_line),
                constraint,
                major=config.major_line,
                promote_previous_minor=config.promote_previous_minor,
            ))
        except EmptyCatalogError as e:
            logger.warning("%s", e)

    plan = build_plan(
        snapshot,
        candidates=candidates,
        require_upgrade_before_init=config.require_upgrade_before_init,
    )
    logger.info("Installer state: %s", plan.state.value)

    ui.notice(t("fetch.menu"))
    menu = build_menu(plan, constraint=constraint, latest=latest)
    return Survey(constraint=constraint, latest=latest, plan=plan, menu=menu)


# ═══════════════════════════════════════════════════════════════════
#  Request collection
# ═══════════════════════════════════════════════════════════════════


def collect_request(
    action: OfferedAction,
    dispatcher: ActionDispatcher,
    ui: WizardUI,
) -> ActionRequest | None:
    """Ask for the parameters ``action`` needs.

    Returns ``None`` when the operator backs out, so the menu is shown again.
    """
    kind = action.kind

    if kind is ActionKind.INSTALL_INTERPRETER:
        version = ui.choose_version(action.version_choices)
        if version is None:
            return None
        return ActionRequest(kind, version=version)

    if kind is ActionKind.INSTALL_PACKAGE:
        initialize = ui.confirm(t("menu.config.initialize"), default=True)
        return ActionRequest(kind, initialize_after_install=initialize)

    if kind is ActionKind.MANAGE_MODULES:
        while True:
            # Only a truly empty answer means "back"; whitespace is invalid input
            modules = ui.ask_modules()
            if modules == "":
                return None
            request = ActionRequest(kind, modules=modules)
            if dispatcher.validate(request) is None:
                return request
            ui.notice(t("menu.modules.invalid"), "error")

    return ActionRequest(kind)


def _report(request: ActionRequest, receipt: Receipt, ui: WizardUI) -> int:
    if receipt.failed:
        logger.error("%s failed: %s", receipt.operation, receipt.error)
        ui.notice(t("message.failed", error=receipt.error or receipt.operation), "error")
        return EXIT_FAILURE

    kind = request.kind
    if kind is ActionKind.INSTALL_PACKAGE and request.initialize_after_install:
        kind = ActionKind.INITIALIZE_PACKAGE
    ui.notice(t(_SUCCESS_KEYS.get(kind, "message.setup_done")), "ok")
    return EXIT_OK


# ═══════════════════════════════════════════════════════════════════
#  Run
# ═══════════════════════════════════════════════════════════════════


def run_wizard(
    config: WizardConfig,
    directory: Path,
    ui: WizardUI,
    *,
    shell: ShellCommandAdapter | None = None,
) -> int:
    """Run the wizard once and return the process exit code."""
    shell = shell or ShellCommandAdapter(cwd=directory)

    try:
        result = survey(config, directory, shell, ui)
    except FetchError as e:
        logger.error("%s", e)
        ui.fatal(t("fetch.error", err=e))
        return EXIT_FAILURE
    except ParseError as e:
        logger.error("Malformed requires_python: %s", e)
        ui.fatal(t("fetch.error", err=e))
        return EXIT_FAILURE
    except ProbeToolMissingError as e:
        logger.error("%s", e)
        ui.fatal(t("check.package.no_pip"))
        return EXIT_FAILURE

    operations = Operations(
        shell,
        config,
        directory,
        notify=lambda key, **params: ui.notice(t(key, **params)),
        on_download_progress=ui.download_progress(),
    )
    dispatcher = ActionDispatcher(result.plan, operations)

    while True:
        action = ui.show_menu(result.menu)
        if action is None:
            logger.debug("Operator exited from the menu")
            return EXIT_OK
        request = collect_request(action, dispatcher, ui)
        if request is not None:
            break

    receipt = dispatcher.dispatch(request)

    # The console is a new window; this one closes straight away
    if request.kind is ActionKind.OPEN_CONSOLE:
        if receipt.failed:
            return _report(request, receipt, ui)
        return EXIT_OK

    code = _report(request, receipt, ui)
    ui.pause()
    return code
