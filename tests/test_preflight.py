import subprocess
import sys

import pytest

from mcp_installer.config import InstallerConfig
from mcp_installer.preflight import EnvironmentChecker, PrerequisiteCheck, RuntimeStatus
from mcp_installer.preflight.models import normalize_version, parse_version

NODE = InstallerConfig().runtime.to_check()
NPM = InstallerConfig().package_manager.to_check()


def fake_which(available):
    def which(name):
        return f"/usr/local/bin/{name}" if name in available else None
    return which


def fake_run(outputs, calls=None):
    def run(cmd, **kwargs):
        if calls is not None:
            calls.append(cmd)
        stdout, code = outputs[cmd[0]]
        return subprocess.CompletedProcess(cmd, code, stdout=stdout, stderr="")
    return run


def test_absent_runtime_is_a_result_not_an_error(monkeypatch):
    calls = []
    monkeypatch.setattr("shutil.which", fake_which(set()))
    monkeypatch.setattr("subprocess.run", fake_run({}, calls))

    status = EnvironmentChecker().check_runtime(NODE)

    assert status.present is False
    assert status.version is None
    assert calls == []


def test_present_runtime_reports_version(monkeypatch):
    calls = []
    monkeypatch.setattr("shutil.which", fake_which({"node"}))
    monkeypatch.setattr("subprocess.run", fake_run({"node": ("v20.11.1\n", 0)}, calls))

    status = EnvironmentChecker().check_runtime(NODE)

    assert status.present is True
    assert status.version == "v20.11.1"
    assert status.path == "/usr/local/bin/node"
    assert calls == [["node", "--version"]]


def test_npm_version_gets_display_prefix(monkeypatch):
    monkeypatch.setattr("shutil.which", fake_which({"npm"}))
    monkeypatch.setattr("subprocess.run", fake_run({"npm": ("10.2.4\n", 0)}))

    status = EnvironmentChecker().check_runtime(NPM)

    assert status.version == "v10.2.4"


def test_failing_version_query_keeps_runtime_present(monkeypatch):
    monkeypatch.setattr("shutil.which", fake_which({"node"}))
    monkeypatch.setattr("subprocess.run", fake_run({"node": ("", 1)}))

    status = EnvironmentChecker().check_runtime(NODE)

    assert status.present is True
    assert status.version == "unknown"


def test_version_query_timeout_keeps_runtime_present(monkeypatch):
    def run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs.get("timeout"))

    monkeypatch.setattr("shutil.which", fake_which({"node"}))
    monkeypatch.setattr("subprocess.run", run)

    status = EnvironmentChecker(version_timeout=1).check_runtime(NODE)

    assert status.present is True
    assert status.version == "unknown"


@pytest.mark.parametrize("version,expected", [
    ("v16.20.2", True),
    ("v18.0.0", False),
    ("v22.3.0", False),
    ("unknown", False),
])
def test_below_minimum(version, expected):
    status = RuntimeStatus.found(NODE, version=version)
    assert status.below_minimum is expected


def test_no_minimum_configured():
    check = PrerequisiteCheck(name="npm", display_name="npm")
    assert RuntimeStatus.found(check, version="1.0.0").below_minimum is False


def test_parse_version():
    assert parse_version("v18.19.0") == (18, 19, 0)
    assert parse_version("10.2") == (10, 2, 0)
    assert parse_version("18") == (18, 0, 0)
    assert parse_version("none") is None


def test_normalize_version():
    assert normalize_version("  10.2.4\n", "v") == "v10.2.4"
    assert normalize_version("v20.1.0\n", "v") == "v20.1.0"
    assert normalize_version("", "v") == "unknown"


def test_status_str():
    assert str(RuntimeStatus.found(NODE, "v20.0.0")) == "[PRESENT] Node.js: v20.0.0"
    assert str(RuntimeStatus.missing(NODE)) == "[ABSENT] Node.js"


def test_undecodable_version_output_is_replaced():
    check = PrerequisiteCheck(
        name=sys.executable,
        display_name="Python",
        version_args=("-c", "import sys; sys.stdout.buffer.write(b'\\xff 1.2.3\\n')"),
    )

    status = EnvironmentChecker().check_runtime(check)

    assert status.present is True
    assert "1.2.3" in status.version


def test_run_all_stops_at_first_missing_required(monkeypatch):
    calls = []
    monkeypatch.setattr("shutil.which", fake_which({"npm"}))
    monkeypatch.setattr("subprocess.run", fake_run({"npm": ("10.2.4\n", 0)}, calls))
    seen = []

    result = EnvironmentChecker().run_all([NODE, NPM], on_check=lambda c: seen.append(c.name))

    assert seen == ["node"]
    assert calls == []
    assert result.passed is False
    assert [s.check.name for s in result.missing] == ["node"]
    assert result.summary() == "FAILED: 0/1 runtimes found"


def test_run_all_continues_past_optional(monkeypatch):
    optional_node = PrerequisiteCheck(name="node", display_name="Node.js", required=False)
    monkeypatch.setattr("shutil.which", fake_which({"npm"}))
    monkeypatch.setattr("subprocess.run", fake_run({"npm": ("10.2.4\n", 0)}))

    result = EnvironmentChecker().run_all([optional_node, NPM])

    assert [s.present for s in result.statuses] == [False, True]
    assert result.passed is True
    assert result.missing == []
    assert result.summary() == "PASSED: 1/2 runtimes found"
