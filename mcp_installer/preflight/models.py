"""
Pre-flight Check Models

Shared data types for runtime detection.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class PrerequisiteCheck:
    """An external runtime that must be on the search path."""
    name: str
    display_name: str
    version_args: Tuple[str, ...] = ("--version",)
    required: bool = True
    install_url: Optional[str] = None
    install_hint: str = ""
    min_version: Optional[str] = None
    version_prefix: str = ""


@dataclass
class RuntimeStatus:
    """Result of probing a single runtime: Present(version) or Absent."""
    check: PrerequisiteCheck
    present: bool
    version: Optional[str] = None
    path: Optional[str] = None

    @classmethod
    def found(cls, check: PrerequisiteCheck, version: str, path: Optional[str] = None) -> "RuntimeStatus":
        return cls(check=check, present=True, version=version, path=path)

    @classmethod
    def missing(cls, check: PrerequisiteCheck) -> "RuntimeStatus":
        return cls(check=check, present=False)

    @property
    def below_minimum(self) -> bool:
        """True when a minimum version is configured and not met."""
        if not self.present or not self.check.min_version or not self.version:
            return False
        current = parse_version(self.version)
        minimum = parse_version(self.check.min_version)
        if current is None or minimum is None:
            return False
        return current < minimum

    def __str__(self) -> str:
        if self.present:
            return f"[PRESENT] {self.check.display_name}: {self.version}"
        return f"[ABSENT] {self.check.display_name}"


_VERSION_RE = re.compile(r"(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def parse_version(text: str) -> Optional[Tuple[int, int, int]]:
    """
    Extract a (major, minor, patch) tuple from a version string.

    Accepts forms like "v18.19.0", "10.2.4" or "18". Missing components
    default to zero.

    Args:
        text: Raw version string

    Returns:
        Version tuple, or None if no number was found
    """
    match = _VERSION_RE.search(text or "")
    if not match:
        return None
    return tuple(int(part or 0) for part in match.groups())


def normalize_version(raw: str, prefix: str = "") -> str:
    """Strip whitespace and ensure the display prefix (e.g. "v") is present."""
    lines = (raw or "").strip().splitlines()
    if not lines:
        return "unknown"
    version = lines[0].strip()
    if prefix and not version.startswith(prefix):
        version = f"{prefix}{version}"
    return version
