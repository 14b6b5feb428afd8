"""
Smoke Tester

Starts the service in its self-test mode under a hard wall-clock timeout.
"""

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


class SmokeTestStatus(str, Enum):
    """Possible smoke test results."""
    PASSED = "passed"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


@dataclass(frozen=True)
class SmokeTestOutcome:
    """Outcome of a smoke test run."""
    status: SmokeTestStatus
    reason: Optional[str] = None

    @classmethod
    def passed(cls) -> "SmokeTestOutcome":
        return cls(SmokeTestStatus.PASSED)

    @classmethod
    def timed_out(cls, timeout_ms: int) -> "SmokeTestOutcome":
        return cls(SmokeTestStatus.TIMED_OUT, reason=f"still running after {timeout_ms}ms")

    @classmethod
    def failed(cls, reason: str) -> "SmokeTestOutcome":
        return cls(SmokeTestStatus.FAILED, reason=reason)


class SmokeTester:
    """
    Smoke tests the installed service process.

    The self-test mode of the service does not exit on its own, so a
    process still running at the deadline counts as started and is
    reported as TIMED_OUT rather than FAILED.
    """

    def __init__(self, runtime: str = "node", probe_args: Sequence[str] = ("--test",)):
        """
        Initialize the smoke tester.

        Args:
            runtime: Executable that runs the entry point
            probe_args: Arguments selecting the self-test mode
        """
        self.runtime = runtime
        self.probe_args = list(probe_args)

    def probe(
        self,
        entry_point: Path,
        timeout_ms: int,
        cwd: Optional[Path] = None,
    ) -> SmokeTestOutcome:
        """
        Run the entry point in self-test mode.

        Args:
            entry_point: Script the runtime should execute
            timeout_ms: Wall-clock limit in milliseconds
            cwd: Working directory for the process (default: the entry
                point's directory)

        Returns:
            SmokeTestOutcome (passed, timed out, or failed with a reason)
        """
        entry_point = Path(entry_point)
        if not entry_point.is_file():
            return SmokeTestOutcome.failed(f"entry point not found: {entry_point}")

        command = [self.runtime, str(entry_point), *self.probe_args]
        logger.debug("Smoke testing %s (timeout %dms)", " ".join(command), timeout_ms)

        try:
            proc = subprocess.Popen(
                command,
                cwd=Path(cwd) if cwd is not None else entry_point.parent,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            return SmokeTestOutcome.failed(f"could not start {self.runtime}: {e}")

        try:
            return_code = proc.wait(timeout=timeout_ms / 1000)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()
            logger.debug("Smoke test still running after %dms, killed", timeout_ms)
            return SmokeTestOutcome.timed_out(timeout_ms)

        if return_code == 0:
            return SmokeTestOutcome.passed()
        if return_code < 0:
            return SmokeTestOutcome.failed(f"killed by signal {-return_code}")
        return SmokeTestOutcome.failed(f"exit code {return_code}")
