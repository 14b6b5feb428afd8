"""
Pydantic models for installer configuration.

An InstallerConfig describes the runtimes to check, how to install the
manifest's dependencies, and how to smoke test the installed service.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..preflight.models import PrerequisiteCheck
from .defaults import (
    DEFAULT_DOCS_HINT,
    DEFAULT_NEXT_STEPS,
    DEFAULT_SMOKE_TIMEOUT_MS,
    NODE_RUNTIME,
    NPM_PACKAGE_MANAGER,
)


class RuntimeSpec(BaseModel):
    """An external runtime expected on the search path."""

    name: str = Field(..., description="Executable name looked up on PATH")
    display_name: Optional[str] = Field(None, description="Human-readable name")
    version_args: List[str] = Field(default_factory=lambda: ["--version"])
    required: bool = Field(default=True)
    install_url: Optional[str] = Field(None, description="Where to get the runtime")
    install_hint: str = Field(default="", description="Remediation text")
    min_version: Optional[str] = Field(None, description="Lowest supported version")
    version_prefix: str = Field(default="", description="Prefix shown before the version")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Executable names must be non-empty and contain no whitespace."""
        v = v.strip()
        if not v or any(c.isspace() for c in v):
            raise ValueError(f"Invalid executable name: {v!r}")
        return v

    def to_check(self) -> PrerequisiteCheck:
        """Convert to the checker's PrerequisiteCheck."""
        return PrerequisiteCheck(
            name=self.name,
            display_name=self.display_name or self.name,
            version_args=tuple(self.version_args),
            required=self.required,
            install_url=self.install_url,
            install_hint=self.install_hint,
            min_version=self.min_version,
            version_prefix=self.version_prefix,
        )


class InstallerConfig(BaseModel):
    """Complete installer configuration."""

    runtime: RuntimeSpec = Field(default_factory=lambda: RuntimeSpec(**NODE_RUNTIME))
    package_manager: RuntimeSpec = Field(
        default_factory=lambda: RuntimeSpec(**NPM_PACKAGE_MANAGER)
    )
    manifest: str = Field(default="package.json", description="Manifest filename")
    install_args: List[str] = Field(default_factory=lambda: ["install"])
    install_timeout_s: Optional[float] = Field(None, gt=0, description="Install time limit")
    entry_point: str = Field(default="server.js", description="Service entry point")
    probe_args: List[str] = Field(default_factory=lambda: ["--test"])
    smoke_timeout_ms: int = Field(default=DEFAULT_SMOKE_TIMEOUT_MS, gt=0)
    service_name: str = Field(default="MCP server")
    next_steps: List[str] = Field(default_factory=lambda: list(DEFAULT_NEXT_STEPS))
    docs_hint: Optional[str] = Field(
        default=DEFAULT_DOCS_HINT, description="Final next step pointing at setup docs"
    )

    @field_validator("install_args")
    @classmethod
    def validate_install_args(cls, v: List[str]) -> List[str]:
        """The install operation needs at least one argument."""
        if not v:
            raise ValueError("install_args must not be empty")
        return v
