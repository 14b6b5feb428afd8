"""
Pre-flight Check Module

Verifies required runtimes before dependency installation.
"""

from .models import PrerequisiteCheck, RuntimeStatus
from .checker import EnvironmentChecker, PreflightResult

__all__ = [
    "EnvironmentChecker",
    "PreflightResult",
    "PrerequisiteCheck",
    "RuntimeStatus",
]
