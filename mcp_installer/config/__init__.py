"""Configuration handling for the installer."""

from .models import InstallerConfig, RuntimeSpec
from .loader import ConfigError, ConfigLoader, resolve_project_dir

__all__ = [
    "InstallerConfig",
    "RuntimeSpec",
    "ConfigError",
    "ConfigLoader",
    "resolve_project_dir",
]
