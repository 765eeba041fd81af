"""
Tests for installer state derivation, offered actions and request validation.
"""

import pytest

from mcdr_setup.core.domain.state_machine import (
    InstallerState,
    build_plan,
    derive_state,
)
from mcdr_setup.core.domain.validation import (
    split_modules,
    validate_modules,
    validate_request,
)
from mcdr_setup.core.domain.version import parse_version
from mcdr_setup.core.errors import ProbeToolMissingError
from mcdr_setup.core.models.action import ActionKind, ActionRequest
from mcdr_setup.core.models.probe import (
    InitializationStatus,
    InterpreterState,
    InterpreterStatus,
    PackageState,
    PackageStatus,
    ProbeSnapshot,
)

PY = InterpreterStatus(InterpreterState.FOUND, parse_version("3.11.5"))


def _snapshot(
    interpreter=PY,
    package=PackageStatus(PackageState.FOUND, parse_version("2.13.0")),
    initialized=True,
):
    return ProbeSnapshot(
        interpreter=interpreter,
        package=package,
        initialization=(
            InitializationStatus.INITIALIZED if initialized
            else InitializationStatus.NOT_INITIALIZED
        ),
    )


def _kinds(plan):
    return [a.kind for a in plan.actions]


class TestDeriveState:
    def test_no_interpreter(self):
        snap = _snapshot(interpreter=InterpreterStatus(InterpreterState.NOT_FOUND), package=None)
        assert derive_state(snap) is InstallerState.NEED_INTERPRETER

    def test_outdated_interpreter_needs_interpreter(self):
        old = InterpreterStatus(InterpreterState.OUTDATED, parse_version("3.6.8"))
        assert derive_state(_snapshot(interpreter=old, package=None)) is InstallerState.NEED_INTERPRETER

    def test_need_package(self):
        snap = _snapshot(package=PackageStatus(PackageState.NOT_FOUND), initialized=False)
        assert derive_state(snap) is InstallerState.NEED_PACKAGE

    def test_outdated_package(self):
        snap = _snapshot(package=PackageStatus(PackageState.OUTDATED, parse_version("2.10.0")))
        assert derive_state(snap) is InstallerState.READY_OUTDATED

    def test_uninitialized(self):
        assert derive_state(_snapshot(initialized=False)) is InstallerState.READY_UNINITIALIZED

    def test_current(self):
        assert derive_state(_snapshot()) is InstallerState.READY_CURRENT

    def test_missing_pip_is_an_error(self):
        snap = _snapshot(package=PackageStatus(PackageState.PROBE_TOOL_MISSING))
        with pytest.raises(ProbeToolMissingError):
            derive_state(snap)


class TestOfferedActions:
    def test_need_interpreter_offers_candidates(self):
        candidates = (parse_version("3.11.5"), parse_version("3.12.1"))
        snap = _snapshot(interpreter=InterpreterStatus(InterpreterState.NOT_FOUND), package=None)
        plan = build_plan(snap, candidates=candidates)
        assert _kinds(plan) == [ActionKind.INSTALL_INTERPRETER]
        assert plan.action(ActionKind.INSTALL_INTERPRETER).version_choices == candidates
        assert plan.candidates == candidates

    def test_need_interpreter_without_candidates_offers_nothing(self):
        snap = _snapshot(interpreter=InterpreterStatus(InterpreterState.NOT_FOUND), package=None)
        plan = build_plan(snap)
        assert plan.state is InstallerState.NEED_INTERPRETER
        assert plan.actions == ()

    def test_need_package(self):
        snap = _snapshot(package=PackageStatus(PackageState.NOT_FOUND), initialized=False)
        plan = build_plan(snap, candidates=(parse_version("3.12.0"),))
        assert _kinds(plan) == [ActionKind.INSTALL_PACKAGE]
        assert plan.action(ActionKind.INSTALL_PACKAGE).asks_initialize
        assert plan.candidates == ()

    def test_uninitialized(self):
        plan = build_plan(_snapshot(initialized=False))
        assert _kinds(plan) == [
            ActionKind.INITIALIZE_PACKAGE,
            ActionKind.MANAGE_MODULES,
            ActionKind.OPEN_CONSOLE,
        ]

    def test_current(self):
        plan = build_plan(_snapshot())
        assert _kinds(plan) == [ActionKind.MANAGE_MODULES, ActionKind.OPEN_CONSOLE]

    def test_outdated_and_initialized(self):
        snap = _snapshot(package=PackageStatus(PackageState.OUTDATED, parse_version("2.10.0")))
        plan = build_plan(snap)
        assert _kinds(plan) == [
            ActionKind.UPGRADE_PACKAGE,
            ActionKind.MANAGE_MODULES,
            ActionKind.OPEN_CONSOLE,
        ]

    def test_outdated_and_uninitialized(self):
        snap = _snapshot(
            package=PackageStatus(PackageState.OUTDATED, parse_version("2.10.0")),
            initialized=False,
        )
        plan = build_plan(snap)
        assert _kinds(plan)[:2] == [ActionKind.INITIALIZE_PACKAGE, ActionKind.UPGRADE_PACKAGE]

    def test_outdated_requires_upgrade_first(self):
        snap = _snapshot(
            package=PackageStatus(PackageState.OUTDATED, parse_version("2.10.0")),
            initialized=False,
        )
        plan = build_plan(snap, require_upgrade_before_init=True)
        assert not plan.offers(ActionKind.INITIALIZE_PACKAGE)
        assert plan.offers(ActionKind.UPGRADE_PACKAGE)


class TestModuleValidation:
    @pytest.mark.parametrize("text", [
        "numpy",
        "numpy requests>=2.0",
        "mcdreforged[full]~=2.13",
        "a==1.* b<3",
    ])
    def test_accepts(self, text):
        assert validate_modules(text)

    @pytest.mark.parametrize("text", [
        "",
        None,
        " numpy",
        "numpy; rm -rf /",
        "numpy && calc",
        "numpy|cat",
        "http://evil/x.whl",
        "-r requirements.txt",
    ])
    def test_rejects(self, text):
        assert not validate_modules(text)

    def test_long_near_miss_is_fast(self):
        assert not validate_modules("a " * 5000 + "!")

    def test_split(self):
        assert split_modules("numpy  requests>=2 ") == ["numpy", "requests>=2"]


class TestValidateRequest:
    def test_not_offered(self):
        plan = build_plan(_snapshot())
        error = validate_request(ActionRequest(ActionKind.UPGRADE_PACKAGE), plan)
        assert error and "not available" in error

    def test_offered(self):
        plan = build_plan(_snapshot())
        assert validate_request(ActionRequest(ActionKind.OPEN_CONSOLE), plan) is None

    def test_version_must_be_offered(self):
        snap = _snapshot(interpreter=InterpreterStatus(InterpreterState.NOT_FOUND), package=None)
        plan = build_plan(snap, candidates=(parse_version("3.11.5"),))
        ok = ActionRequest(ActionKind.INSTALL_INTERPRETER, version=parse_version("3.11.5"))
        bad = ActionRequest(ActionKind.INSTALL_INTERPRETER, version=parse_version("3.9.0"))
        missing = ActionRequest(ActionKind.INSTALL_INTERPRETER)
        assert validate_request(ok, plan) is None
        assert validate_request(bad, plan)
        assert validate_request(missing, plan)

    def test_modules_checked(self):
        plan = build_plan(_snapshot())
        good = ActionRequest(ActionKind.MANAGE_MODULES, modules="numpy")
        bad = ActionRequest(ActionKind.MANAGE_MODULES, modules="numpy;calc")
        assert validate_request(good, plan) is None
        assert validate_request(bad, plan)
