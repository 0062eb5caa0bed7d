"""
Configuration loader for YAML files.

Handles loading, validation, and saving of the preview configuration.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from .defaults import get_default_config
from .models import PreviewConfig


class ConfigError(Exception):
    """Configuration loading or validation error."""
    pass


class ConfigLoader:
    """
    Loads and validates configuration from a YAML file.

    Without a path the built-in defaults are used.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the config loader.

        Args:
            config_path: Path to config file
        """
        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[PreviewConfig] = None

    def load(self) -> PreviewConfig:
        """
        Load the configuration.

        Returns:
            Validated PreviewConfig

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
        """
        if self.config_path is None:
            self._config = self._parse(get_default_config())
            return self._config

        if not self.config_path.is_file():
            raise ConfigError(f"Configuration file does not exist: {self.config_path}")

        self._config = self._parse(self._read_yaml(self.config_path))
        return self._config

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
            raise ConfigError(f"Expected a mapping at the top of {file_path}")
        return data

    def _parse(self, data: Dict[str, Any]) -> PreviewConfig:
        try:
            return PreviewConfig(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}")

    @property
    def config(self) -> Optional[PreviewConfig]:
        """Get loaded configuration."""
        return self._config

    def save(self, output_path: Union[str, Path]) -> None:
        """
        Save current configuration to a YAML file.

        Args:
            output_path: File to write
        """
        config = self._config or self._parse(get_default_config())
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            yaml.dump(
                config.model_dump(),
                f,
                default_flow_style=False,
                sort_keys=False,
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigLoader":
        """
        Create a ConfigLoader from a dictionary.

        Useful for programmatic configuration.
        """
        loader = cls()
        loader._config = loader._parse(data)
        return loader
