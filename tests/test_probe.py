"""
Tests for environment probing — classifiers and the probe runner.
"""

from pathlib import Path

from mcdr_setup.core.domain.version import parse_constraint, parse_version
from mcdr_setup.core.models.probe import (
    CommandOutput,
    DirectoryStatus,
    InitializationStatus,
    InterpreterState,
    PackageState,
)
from mcdr_setup.core.services.probe import (
    classify_directory,
    classify_initialization,
    classify_interpreter,
    classify_package,
    probe_environment,
)

from tests.fakes import PIP_NOT_INSTALLED, pip_show_output, python_output

MISSING = CommandOutput(exit_code=None, tool_missing=True)


class TestClassifyInterpreter:
    def test_found(self):
        status = classify_interpreter(python_output("3.11.5"), parse_constraint(">=3.8"))
        assert status.state is InterpreterState.FOUND
        assert status.version == parse_version("3.11.5")

    def test_outdated(self):
        status = classify_interpreter(python_output("3.6.8"), parse_constraint(">=3.8"))
        assert status.state is InterpreterState.OUTDATED
        assert str(status.version) == "3.6.8"

    def test_missing_tool(self):
        status = classify_interpreter(MISSING, parse_constraint(">=3.8"))
        assert status.state is InterpreterState.NOT_FOUND

    def test_nonzero_exit(self):
        # Windows store alias stub prints nothing useful and exits 9009
        output = CommandOutput(exit_code=9009, stdout="Python was not found")
        status = classify_interpreter(output, parse_constraint(""))
        assert status.state is InterpreterState.NOT_FOUND

    def test_unrecognised_output(self):
        output = CommandOutput(exit_code=0, stdout="Python 3.11\n")
        assert classify_interpreter(output, parse_constraint("")).state is InterpreterState.NOT_FOUND


class TestClassifyPackage:
    def test_current(self):
        status = classify_package(pip_show_output("2.13.0"), parse_version("2.13.0"))
        assert status.state is PackageState.FOUND

    def test_outdated(self):
        status = classify_package(pip_show_output("2.10.1"), parse_version("2.13.0"))
        assert status.state is PackageState.OUTDATED
        assert str(status.version) == "2.10.1"

    def test_newer_than_published_counts_as_current(self):
        status = classify_package(pip_show_output("2.14.0"), parse_version("2.13.0"))
        assert status.state is PackageState.FOUND

    def test_unknown_latest(self):
        assert classify_package(pip_show_output("2.0"), None).state is PackageState.FOUND

    def test_not_installed(self):
        assert classify_package(PIP_NOT_INSTALLED, parse_version("2.13.0")).state is PackageState.NOT_FOUND

    def test_tool_missing(self):
        status = classify_package(MISSING, parse_version("2.13.0"))
        assert status.state is PackageState.PROBE_TOOL_MISSING


class TestClassifyDirectory:
    def test_markers(self, tmp_path: Path):
        markers = ["permission.yml", "config.yml"]
        assert classify_initialization(tmp_path, markers) is InitializationStatus.NOT_INITIALIZED
        (tmp_path / "config.yml").write_text("")
        assert classify_initialization(tmp_path, markers) is InitializationStatus.NOT_INITIALIZED
        (tmp_path / "permission.yml").write_text("")
        assert classify_initialization(tmp_path, markers) is InitializationStatus.INITIALIZED

    def test_empty(self, tmp_path: Path):
        assert classify_directory(tmp_path) is DirectoryStatus.EMPTY

    def test_only_installer(self, tmp_path: Path):
        (tmp_path / "mcdr-setup.exe").write_bytes(b"")
        assert classify_directory(tmp_path, "mcdr-setup.exe") is DirectoryStatus.EMPTY

    def test_non_empty(self, tmp_path: Path):
        (tmp_path / "mcdr-setup.exe").write_bytes(b"")
        (tmp_path / "world").mkdir()
        assert classify_directory(tmp_path, "mcdr-setup.exe") is DirectoryStatus.NON_EMPTY

    def test_missing_directory(self, tmp_path: Path):
        assert classify_directory(tmp_path / "nope") is DirectoryStatus.EMPTY


class TestProbeEnvironment:
    def test_package_probed_when_interpreter_found(self, make_shell, config, workdir):
        shell = make_shell({
            ("python", "--version"): python_output("3.11.5"),
            ("pip", "show"): pip_show_output("2.13.0"),
        })
        snap = probe_environment(
            shell, config, workdir,
            constraint=parse_constraint(">=3.8"), latest=parse_version("2.13.0"),
        )
        assert snap.interpreter.found
        assert snap.package.state is PackageState.FOUND
        assert snap.initialization is InitializationStatus.NOT_INITIALIZED
        assert ("probe", "pip", ["show", "mcdreforged"]) in shell.calls

    def test_package_skipped_without_interpreter(self, make_shell, config, workdir):
        shell = make_shell()
        snap = probe_environment(
            shell, config, workdir,
            constraint=parse_constraint(">=3.8"), latest=parse_version("2.13.0"),
        )
        assert snap.interpreter.state is InterpreterState.NOT_FOUND
        assert snap.package is None
        assert [c[1] for c in shell.calls] == ["python"]
