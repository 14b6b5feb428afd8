"""
Dependency Installer

Runs the package manager's install operation against a project manifest.
"""

import logging
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass
class InstallOutcome:
    """Result of a single install attempt."""
    succeeded: bool
    diagnostic_output: str = ""
    return_code: Optional[int] = None
    command: List[str] = field(default_factory=list)

    def tail(self, lines: int = 20) -> List[str]:
        """Get the last non-empty lines of diagnostic output."""
        text = [line for line in self.diagnostic_output.splitlines() if line.strip()]
        return text[-lines:]


class Installer:
    """
    Installs a manifest's dependencies with the package manager.

    The install is attempted exactly once. Re-running against an
    already-satisfied dependency tree is a no-op for the caller.
    """

    def __init__(
        self,
        package_manager: str = "npm",
        install_args: Sequence[str] = ("install",),
        manifest: str = "package.json",
        timeout: Optional[float] = None,
    ):
        """
        Initialize the installer.

        Args:
            package_manager: Package manager executable
            install_args: Arguments for the install operation
            manifest: Manifest filename expected in the project directory
            timeout: Optional limit in seconds for the install command
        """
        self.package_manager = package_manager
        self.install_args = list(install_args)
        self.manifest = manifest
        self.timeout = timeout

    def install(self, project_dir: Path) -> InstallOutcome:
        """
        Install dependencies for the project in project_dir.

        Args:
            project_dir: Directory containing the manifest

        Returns:
            InstallOutcome with the package manager's result
        """
        project_dir = Path(project_dir)
        command = [self.package_manager, *self.install_args]
        manifest_path = project_dir / self.manifest

        if not manifest_path.is_file():
            return InstallOutcome(
                succeeded=False,
                diagnostic_output=f"No {self.manifest} found in {project_dir}",
                command=command,
            )

        logger.debug("Running %s in %s", " ".join(command), project_dir)
        started = time.monotonic()

        try:
            result = subprocess.run(
                command,
                cwd=project_dir,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            return InstallOutcome(
                succeeded=False,
                diagnostic_output=f"{' '.join(command)} timed out after {self.timeout}s",
                command=command,
            )
        except OSError as e:
            return InstallOutcome(
                succeeded=False,
                diagnostic_output=f"Could not run {self.package_manager}: {e}",
                command=command,
            )

        logger.debug(
            "%s exited with code %d in %.1fs",
            " ".join(command), result.returncode, time.monotonic() - started,
        )

        output = "\n".join(part for part in (result.stdout, result.stderr) if part)
        return InstallOutcome(
            succeeded=result.returncode == 0,
            diagnostic_output=output,
            return_code=result.returncode,
            command=command,
        )
