import io
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from rich.console import Console

from mcp_installer.config import InstallerConfig
from mcp_installer.install import InstallOutcome, SmokeTestOutcome
from mcp_installer.output import Reporter
from mcp_installer.preflight import EnvironmentChecker, PrerequisiteCheck, RuntimeStatus


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the project dir override from leaking in from the host."""
    monkeypatch.delenv("MCP_INSTALLER_PROJECT_DIR", raising=False)


@pytest.fixture
def project_dir(tmp_path) -> Path:
    (tmp_path / "package.json").write_text('{"name": "mcp-server", "version": "1.0.0"}\n')
    (tmp_path / "server.js").write_text("console.log('ok');\n")
    return tmp_path


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False, soft_wrap=True)


@pytest.fixture
def reporter(console) -> Reporter:
    return Reporter(console)


def output_lines(console: Console) -> List[str]:
    return [line for line in console.file.getvalue().splitlines() if line.strip()]


class FakeChecker(EnvironmentChecker):
    """Answers runtime checks from a name -> version table (None = absent)."""

    def __init__(self, versions: Dict[str, Optional[str]]):
        super().__init__()
        self.versions = versions
        self.calls: List[str] = []

    def check_runtime(self, check: PrerequisiteCheck) -> RuntimeStatus:
        self.calls.append(check.name)
        version = self.versions.get(check.name)
        if version is None:
            return RuntimeStatus.missing(check)
        return RuntimeStatus.found(check, version=version, path=f"/usr/bin/{check.name}")


class FakeInstaller:
    def __init__(self, succeeded: bool = True, output: str = ""):
        self.succeeded = succeeded
        self.output = output
        self.calls: List[Path] = []

    def install(self, project_dir: Path) -> InstallOutcome:
        self.calls.append(project_dir)
        return InstallOutcome(
            succeeded=self.succeeded,
            diagnostic_output=self.output,
            return_code=0 if self.succeeded else 1,
            command=["npm", "install"],
        )


class FakeSmokeTester:
    def __init__(self, outcome: SmokeTestOutcome):
        self.outcome = outcome
        self.calls: List[tuple] = []

    def probe(self, entry_point: Path, timeout_ms: int, cwd: Optional[Path] = None) -> SmokeTestOutcome:
        self.calls.append((entry_point, timeout_ms, cwd))
        return self.outcome


@pytest.fixture
def config() -> InstallerConfig:
    return InstallerConfig()


class FakePopen:
    def __init__(self, cmd, **kwargs):
        self.cmd = cmd
        self.kwargs = kwargs

    def wait(self, timeout=None):
        return 0

    def kill(self):
        pass


@pytest.fixture
def host(monkeypatch):
    """Fake a host with node and npm installed and a working registry."""
    state = {"available": {"node", "npm"}, "install_code": 0, "commands": []}

    def which(name):
        return f"/usr/bin/{name}" if name in state["available"] else None

    def run(cmd, **kwargs):
        state["commands"].append(cmd)
        if cmd[-1] == "--version":
            version = {"node": "v20.11.1\n", "npm": "10.2.4\n"}[cmd[0]]
            return subprocess.CompletedProcess(cmd, 0, stdout=version, stderr="")
        return subprocess.CompletedProcess(cmd, state["install_code"], stdout="", stderr="npm ERR! boom")

    monkeypatch.setattr("shutil.which", which)
    monkeypatch.setattr("subprocess.run", run)
    monkeypatch.setattr("subprocess.Popen", FakePopen)
    return state
