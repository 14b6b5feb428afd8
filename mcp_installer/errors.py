"""
Installer Errors

Fatal conditions that end a run with exit code 1. Smoke test problems are
not errors; they are reported through SmokeTestOutcome.
"""

from typing import Optional


class InstallerError(Exception):
    """Base class for fatal installer errors."""

    def __init__(self, message: str, hint: str = "", url: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.url = url


class MissingRuntimeError(InstallerError):
    """The primary runtime is not on the search path."""
    pass


class MissingPackageManagerError(InstallerError):
    """The package manager is not on the search path."""
    pass


class InstallFailureError(InstallerError):
    """The package manager did not install the manifest's dependencies."""

    def __init__(self, message: str, diagnostic_output: str = "", hint: str = ""):
        super().__init__(message, hint=hint)
        self.diagnostic_output = diagnostic_output
