"""
Configuration loader for YAML files.

Finds an optional installer configuration file in the project directory
and validates it against InstallerConfig.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from .defaults import CONFIG_FILENAMES, PROJECT_DIR_ENV
from .models import InstallerConfig

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Configuration loading or validation error."""
    pass


def resolve_project_dir(
    explicit: Optional[Union[str, Path]] = None,
    anchor: Optional[Union[str, Path]] = None,
) -> Path:
    """
    Work out which directory holds the project manifest.

    Precedence: explicit path, then the MCP_INSTALLER_PROJECT_DIR
    environment variable, then the directory containing ``anchor``
    (usually the launching script), then the current directory.

    Args:
        explicit: Directory given on the command line
        anchor: File whose resolved parent directory should be used

    Returns:
        Absolute project directory
    """
    if explicit:
        return Path(explicit).expanduser().resolve()

    env_dir = os.environ.get(PROJECT_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser().resolve()

    if anchor:
        return Path(anchor).resolve().parent

    return Path.cwd().resolve()


class ConfigLoader:
    """
    Loads installer configuration.

    Uses an explicit file when one is given, otherwise looks for
    mcp-installer.yaml (or .yml) in the project directory. Without a file
    the built-in defaults apply.
    """

    def __init__(
        self,
        project_dir: Union[str, Path],
        config_path: Optional[Union[str, Path]] = None,
    ):
        """
        Initialize the config loader.

        Args:
            project_dir: Project directory to search
            config_path: Explicit configuration file
        """
        self.project_dir = Path(project_dir)
        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[InstallerConfig] = None
        self._source: Optional[Path] = None

    def load(self) -> InstallerConfig:
        """
        Load and validate configuration.

        Returns:
            InstallerConfig

        Raises:
            ConfigError: If the file cannot be read or is invalid
        """
        path = self._find_config_file()
        if path is None:
            logger.debug("No config file in %s, using defaults", self.project_dir)
            self._config = InstallerConfig()
            return self._config

        logger.debug("Loading config from %s", path)
        data = self._read_yaml(path)
        try:
            self._config = InstallerConfig(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid installer configuration in {path}: {e}")
        self._source = path
        return self._config

    def _find_config_file(self) -> Optional[Path]:
        """Locate the configuration file, if any."""
        if self.config_path is not None:
            if not self.config_path.is_file():
                raise ConfigError(f"Configuration file does not exist: {self.config_path}")
            return self.config_path

        for filename in CONFIG_FILENAMES:
            candidate = self.project_dir / filename
            if candidate.is_file():
                return candidate
        return None

    def _read_yaml(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse a YAML file."""
        try:
            with open(file_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {file_path}: {e}")
        except IOError as e:
            raise ConfigError(f"Cannot read {file_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping in {file_path}, got {type(data).__name__}")
        return data

    @property
    def config(self) -> Optional[InstallerConfig]:
        """Get loaded configuration."""
        return self._config

    @property
    def source(self) -> Optional[Path]:
        """Get the file the configuration was loaded from, if any."""
        return self._source
