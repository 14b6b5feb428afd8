"""
Installer Orchestrator

Sequences runtime checks, dependency installation and the smoke test,
and maps their outcomes to the process exit status.
"""

import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, NoReturn, Optional, Union

from .config import ConfigError, ConfigLoader, InstallerConfig
from .errors import (
    InstallerError,
    InstallFailureError,
    MissingPackageManagerError,
    MissingRuntimeError,
)
from .install import Installer, SmokeTester, SmokeTestOutcome, SmokeTestStatus
from .output import Reporter
from .preflight import EnvironmentChecker, PreflightResult, PrerequisiteCheck, RuntimeStatus

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class RunState(str, Enum):
    """States of a single installer run."""
    INIT = "init"
    CHECKING_RUNTIME = "checking_runtime"
    CHECKING_PACKAGE_MANAGER = "checking_package_manager"
    INSTALLING = "installing"
    SMOKE_TESTING = "smoke_testing"
    DONE = "done"
    FAILED = "failed"


TERMINAL_STATES = (RunState.DONE, RunState.FAILED)


@dataclass
class RunResult:
    """Terminal result of a run, translated directly into the exit status."""
    exit_code: int
    message: str
    state: RunState
    history: List[RunState] = field(default_factory=list)
    smoke_outcome: Optional[SmokeTestOutcome] = None
    preflight: Optional[PreflightResult] = None

    @property
    def succeeded(self) -> bool:
        return self.exit_code == EXIT_SUCCESS


class Orchestrator:
    """
    Runs the installer state machine once.

    INIT -> CHECKING_RUNTIME -> CHECKING_PACKAGE_MANAGER -> INSTALLING
    -> SMOKE_TESTING -> DONE, with FAILED reachable from every
    non-terminal state. Any smoke test outcome leads to DONE.
    """

    def __init__(
        self,
        project_dir: Union[str, Path],
        config: Optional[InstallerConfig] = None,
        config_path: Optional[Union[str, Path]] = None,
        reporter: Optional[Reporter] = None,
        checker: Optional[EnvironmentChecker] = None,
        installer: Optional[Installer] = None,
        smoke_tester: Optional[SmokeTester] = None,
    ):
        """
        Initialize the orchestrator.

        Collaborators that are not supplied are built from the
        configuration once it has been loaded.

        Args:
            project_dir: Directory holding the manifest and entry point
            config: Pre-loaded configuration
            config_path: Explicit configuration file to load
            reporter: Output reporter
            checker: Runtime checker
            installer: Dependency installer
            smoke_tester: Service smoke tester
        """
        self.project_dir = Path(project_dir)
        self.config = config
        self.config_path = config_path
        self.reporter = reporter or Reporter()
        self.checker = checker
        self.installer = installer
        self.smoke_tester = smoke_tester

        self.state = RunState.INIT
        self.history: List[RunState] = []
        self.preflight: Optional[PreflightResult] = None

    # ============================================================
    # Public API
    # ============================================================

    def execute(self, check_only: bool = False) -> RunResult:
        """
        Run the state machine to a terminal state.

        Args:
            check_only: Stop after the runtime checks

        Returns:
            RunResult for the run
        """
        if self.history:
            raise RuntimeError("Orchestrator has already run")

        smoke_outcome = None
        self._enter(RunState.INIT)

        try:
            self._initialize()

            self._check_runtimes()

            if not check_only:
                self._enter(RunState.INSTALLING)
                self._install()

                self._enter(RunState.SMOKE_TESTING)
                smoke_outcome = self._smoke_test()

        except (InstallerError, ConfigError) as e:
            self._enter(RunState.FAILED)
            message = self._report_failure(e)
            return RunResult(
                exit_code=EXIT_FAILURE,
                message=message,
                state=self.state,
                history=list(self.history),
                preflight=self.preflight,
            )

        self._enter(RunState.DONE)
        message = self._report_done(check_only)
        return RunResult(
            exit_code=EXIT_SUCCESS,
            message=message,
            state=self.state,
            history=list(self.history),
            smoke_outcome=smoke_outcome,
            preflight=self.preflight,
        )

    def main(self, check_only: bool = False) -> NoReturn:
        """Run and terminate the process with the run's exit code."""
        result = self.execute(check_only=check_only)
        logger.debug("Run finished in state %s (exit %d)", result.state.value, result.exit_code)
        sys.exit(result.exit_code)

    # ============================================================
    # States
    # ============================================================

    def _enter(self, state: RunState) -> None:
        if self.state in TERMINAL_STATES:
            raise RuntimeError(f"Cannot leave terminal state {self.state.value}")
        logger.debug("State: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _initialize(self) -> None:
        """Load configuration and build missing collaborators."""
        if self.config is None:
            self.config = ConfigLoader(self.project_dir, self.config_path).load()

        config = self.config
        if self.checker is None:
            self.checker = EnvironmentChecker()
        if self.installer is None:
            self.installer = Installer(
                package_manager=config.package_manager.name,
                install_args=config.install_args,
                manifest=config.manifest,
                timeout=config.install_timeout_s,
            )
        if self.smoke_tester is None:
            self.smoke_tester = SmokeTester(
                runtime=config.runtime.name,
                probe_args=config.probe_args,
            )

    def _check_runtimes(self) -> None:
        """
        Run the runtime and package manager checks in order.

        Each check enters its own state before it runs. A required
        prerequisite that is absent stops the run; an optional one is
        reported as a warning.
        """
        stages = [
            (RunState.CHECKING_RUNTIME, self.config.runtime.to_check(), MissingRuntimeError),
            (RunState.CHECKING_PACKAGE_MANAGER, self.config.package_manager.to_check(),
             MissingPackageManagerError),
        ]
        pending = iter(stages)
        self.preflight = self.checker.run_all(
            [check for _, check, _ in stages],
            on_check=lambda check: self._enter(next(pending)[0]),
        )
        logger.debug("Preflight: %s", self.preflight.summary())

        for (_, check, error), status in zip(stages, self.preflight.statuses):
            if status.present:
                self._report_found(status)
            elif check.required:
                raise error(
                    f"{check.display_name} not found!",
                    hint=check.install_hint,
                    url=check.install_url,
                )
            else:
                self.reporter.warning(f"{check.display_name} not found (optional), continuing")
        self.reporter.blank()

    def _install(self) -> None:
        self.reporter.heading(f"📦 Installing {self.config.service_name} dependencies...")
        self.reporter.info(f"📁 Directory: {self.project_dir}")

        outcome = self.installer.install(self.project_dir)
        if not outcome.succeeded:
            raise InstallFailureError(
                "Failed to install dependencies!",
                diagnostic_output="\n".join(outcome.tail()),
                hint=f"Try running '{' '.join(outcome.command)}' manually",
            )

        self.reporter.success("Dependencies installed successfully!")
        self.reporter.blank()

    def _smoke_test(self) -> SmokeTestOutcome:
        name = self.config.service_name
        self.reporter.heading(f"🧪 Testing {name}...")

        entry_point = self.project_dir / self.config.entry_point
        outcome = self.smoke_tester.probe(
            entry_point, self.config.smoke_timeout_ms, cwd=self.project_dir
        )
        logger.debug("Smoke test outcome: %s (%s)", outcome.status.value, outcome.reason)

        if outcome.status == SmokeTestStatus.PASSED:
            self.reporter.success(f"{name} test passed!")
        elif outcome.status == SmokeTestStatus.TIMED_OUT:
            self.reporter.warning(f"{name} test timeout (this is normal)")
        else:
            self.reporter.warning(f"{name} test failed: {outcome.reason}")
            command = " ".join([self.config.runtime.name, self.config.entry_point, *self.config.probe_args])
            self.reporter.hint(f"Dependencies are installed; run '{command}' to investigate")
        return outcome

    # ============================================================
    # Reporting
    # ============================================================

    def _report_found(self, status: RuntimeStatus) -> None:
        check: PrerequisiteCheck = status.check
        self.reporter.success(f"{check.display_name} found: {status.version}")
        if status.below_minimum:
            self.reporter.warning(
                f"{check.display_name} {status.version} is older than the supported "
                f"minimum (v{check.min_version}+)"
            )

    def _report_failure(self, error: Exception) -> str:
        if isinstance(error, ConfigError):
            message = str(error)
            self.reporter.error(message)
            return message

        self.reporter.error(error.message)
        diagnostic = getattr(error, "diagnostic_output", "")
        if diagnostic:
            self.reporter.details(diagnostic.splitlines())
        if error.hint:
            self.reporter.hint(error.hint)
        if error.url:
            self.reporter.link(error.url)
        return error.message

    def _report_done(self, check_only: bool) -> str:
        if check_only:
            message = f"All required runtimes are available ({self.preflight.summary()})"
            self.reporter.success(message)
            return message

        message = f"{self.config.service_name} is ready!"
        self.reporter.blank()
        self.reporter.success(message)
        steps = list(self.config.next_steps)
        if self.config.docs_hint:
            steps.append(self.config.docs_hint)
        self.reporter.next_steps("Next steps:", steps)
        return message
