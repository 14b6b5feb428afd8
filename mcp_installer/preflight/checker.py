"""
Pre-flight Checker

Detects the external runtimes the project needs before installation.
"""

import logging
import shutil
import subprocess
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .models import PrerequisiteCheck, RuntimeStatus, normalize_version

logger = logging.getLogger(__name__)

VERSION_QUERY_TIMEOUT = 10


@dataclass
class PreflightResult:
    """Ordered runtime statuses from a pre-flight run."""
    statuses: List[RuntimeStatus] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """Check if every required runtime is present."""
        return not self.missing

    @property
    def missing(self) -> List[RuntimeStatus]:
        """Get required runtimes that were not found."""
        return [s for s in self.statuses if not s.present and s.check.required]

    def summary(self) -> str:
        """Get summary string."""
        found = len([s for s in self.statuses if s.present])
        status = "PASSED" if self.passed else "FAILED"
        return f"{status}: {found}/{len(self.statuses)} runtimes found"


class EnvironmentChecker:
    """
    Verifies presence and version of the runtimes a project needs.

    Only read-only host queries are made: a search-path lookup and a
    version query. An absent runtime is a result, not an exception; the
    caller decides whether it is fatal.
    """

    def __init__(self, version_timeout: float = VERSION_QUERY_TIMEOUT):
        """
        Initialize the checker.

        Args:
            version_timeout: Seconds to wait for a version query
        """
        self.version_timeout = version_timeout

    def check_runtime(self, check: PrerequisiteCheck) -> RuntimeStatus:
        """
        Detect a single runtime.

        Args:
            check: The runtime to look for

        Returns:
            RuntimeStatus, present with its version or absent
        """
        path = shutil.which(check.name)
        if path is None:
            logger.debug("%s not found on PATH", check.name)
            return RuntimeStatus.missing(check)

        version = self._query_version(check)
        logger.debug("%s found at %s (%s)", check.name, path, version)
        return RuntimeStatus.found(check, version=version, path=path)

    def _query_version(self, check: PrerequisiteCheck) -> str:
        """Ask the runtime for its version string."""
        try:
            proc = subprocess.run(
                [check.name, *check.version_args],
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.version_timeout,
            )
        except (subprocess.TimeoutExpired, OSError) as e:
            logger.warning("Could not query %s version: %s", check.name, e)
            return "unknown"

        if proc.returncode != 0:
            logger.warning(
                "%s %s exited with code %d",
                check.name, " ".join(check.version_args), proc.returncode,
            )
            return "unknown"

        return normalize_version(proc.stdout, check.version_prefix)

    def run_all(
        self,
        checks: Sequence[PrerequisiteCheck],
        on_check: Optional[Callable[[PrerequisiteCheck], None]] = None,
    ) -> PreflightResult:
        """
        Run checks in order, stopping at the first missing required runtime.

        Args:
            checks: Runtimes to verify, primary runtime first
            on_check: Called with each check before it runs

        Returns:
            PreflightResult with the statuses collected so far
        """
        result = PreflightResult()
        for check in checks:
            if on_check is not None:
                on_check(check)
            status = self.check_runtime(check)
            result.statuses.append(status)
            if not status.present and check.required:
                break
        return result
