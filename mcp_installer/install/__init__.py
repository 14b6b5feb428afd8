"""Dependency installation and smoke testing."""

from .installer import Installer, InstallOutcome
from .smoke import SmokeTester, SmokeTestOutcome, SmokeTestStatus

__all__ = [
    "Installer",
    "InstallOutcome",
    "SmokeTester",
    "SmokeTestOutcome",
    "SmokeTestStatus",
]
