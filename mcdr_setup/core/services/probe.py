"""
Environment probe — classify what is installed on this host.

Classifiers are pure: they take the raw output of a probe command (or a
directory) and return a status value.  They never decide what to do
with it.  The ``probe_*`` runners execute the commands through the
shell adapter and feed the classifiers.
"""

from __future__ import annotations

import logging
import re
import sys
from pathlib import Path
from typing import Iterable

from mcdr_setup.adapters.shell.command import ShellCommandAdapter
from mcdr_setup.core.config.loader import WizardConfig
from mcdr_setup.core.domain.version import (
    Version,
    VersionConstraint,
    parse_version,
    satisfies,
)
from mcdr_setup.core.errors import ParseError
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

logger = logging.getLogger(__name__)

INTERPRETER_VERSION_RE = re.compile(r"Python (\d+\.\d+\.\d+)")
PACKAGE_VERSION_RE = re.compile(r"Version: (\d+\.\d+(?:\.\d+)?)")


# ═══════════════════════════════════════════════════════════════════
#  Classify
# ═══════════════════════════════════════════════════════════════════


def classify_interpreter(
    output: CommandOutput,
    constraint: VersionConstraint,
) -> InterpreterStatus:
    """Classify ``python --version`` output against ``requires_python``."""
    if output.tool_missing or output.exit_code != 0:
        return InterpreterStatus(InterpreterState.NOT_FOUND)

    match = INTERPRETER_VERSION_RE.search(output.stdout)
    if not match:
        return InterpreterStatus(InterpreterState.NOT_FOUND)

    try:
        version = parse_version(match.group(1))
    except ParseError:
        return InterpreterStatus(InterpreterState.NOT_FOUND)

    if not satisfies(version, constraint):
        logger.info("Interpreter %s does not satisfy '%s'", version, constraint)
        return InterpreterStatus(InterpreterState.OUTDATED, version)
    return InterpreterStatus(InterpreterState.FOUND, version)


def classify_package(output: CommandOutput, latest: Version | None) -> PackageStatus:
    """Classify ``pip show <package>`` output against the published version.

    ``latest`` may be ``None`` when the published version could not be
    parsed; the installed package then counts as current.
    """
    if output.tool_missing:
        return PackageStatus(PackageState.PROBE_TOOL_MISSING)
    if output.exit_code != 0:
        return PackageStatus(PackageState.NOT_FOUND)

    match = PACKAGE_VERSION_RE.search(output.stdout)
    if not match:
        return PackageStatus(PackageState.NOT_FOUND)

    try:
        installed = parse_version(match.group(1))
    except ParseError:
        return PackageStatus(PackageState.NOT_FOUND)

    if latest is not None and installed < latest:
        return PackageStatus(PackageState.OUTDATED, installed)
    return PackageStatus(PackageState.FOUND, installed)


def classify_initialization(directory: Path, markers: Iterable[str]) -> InitializationStatus:
    """Initialized when every marker file exists in ``directory``."""
    if all((directory / name).exists() for name in markers):
        return InitializationStatus.INITIALIZED
    return InitializationStatus.NOT_INITIALIZED


def classify_directory(directory: Path, self_name: str | None = None) -> DirectoryStatus:
    """Non-empty when ``directory`` holds anything but the installer itself."""
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        logger.debug("Cannot list %s: %s", directory, e)
        return DirectoryStatus.EMPTY
    if any(entry.name != self_name for entry in entries):
        return DirectoryStatus.NON_EMPTY
    return DirectoryStatus.EMPTY


def installer_name() -> str:
    """File name of the running installer (script or frozen executable)."""
    executable = sys.executable if getattr(sys, "frozen", False) else sys.argv[0]
    return Path(executable).name


# ═══════════════════════════════════════════════════════════════════
#  Probe
# ═══════════════════════════════════════════════════════════════════


def probe_interpreter(
    shell: ShellCommandAdapter,
    config: WizardConfig,
    constraint: VersionConstraint,
) -> InterpreterStatus:
    output = shell.probe(config.interpreter_command, ["--version"])
    status = classify_interpreter(output, constraint)
    logger.debug("Interpreter status: %s", status)
    return status


def probe_package(
    shell: ShellCommandAdapter,
    config: WizardConfig,
    latest: Version | None,
) -> PackageStatus:
    output = shell.probe(config.pip_command, ["show", config.package_name])
    status = classify_package(output, latest)
    logger.debug("Package status: %s", status)
    return status


def probe_environment(
    shell: ShellCommandAdapter,
    config: WizardConfig,
    directory: Path,
    *,
    constraint: VersionConstraint,
    latest: Version | None,
) -> ProbeSnapshot:
    """Run every probe in order and bundle the results.

    The package is only probed when a usable interpreter was found.
    """
    interpreter = probe_interpreter(shell, config, constraint)
    package = probe_package(shell, config, latest) if interpreter.found else None
    return ProbeSnapshot(
        interpreter=interpreter,
        package=package,
        initialization=classify_initialization(directory, config.marker_files),
        directory=classify_directory(directory, installer_name()),
    )
