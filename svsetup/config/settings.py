"""
Configuration management for svsetup.

This module handles configuration loading, validation, and management
using YAML files and environment variables.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from platformdirs import user_config_dir, user_data_dir

from ..constants import (
    CONNECT_TIMEOUT_SECONDS, DEFAULT_SERVER_DIRECTORY, DEFAULT_SERVER_TYPE,
    DEFAULT_VERSION, DOWNLOAD_CHUNK_SIZE, READ_TIMEOUT_SECONDS
)
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "SVSETUP_CONFIG_DIR"

# Settings that name versions are read back as strings, whatever YAML made of them
VERSION_KEYS = ("version", "build")


class ProjectFileLoader(yaml.SafeLoader):
    """SafeLoader that leaves dotted numbers such as ``1.20`` as strings."""


ProjectFileLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:float"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _stringify_versions(settings: Dict[str, Any]) -> Dict[str, Any]:
    for key in VERSION_KEYS:
        value = settings.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            settings[key] = str(value)
    return settings


class Config:
    """Configuration manager for svsetup."""

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        self.app_name = "svsetup"
        override = config_dir or os.environ.get(CONFIG_DIR_ENV)
        if override:
            self.config_dir = Path(override)
            self.data_dir = self.config_dir
        else:
            self.config_dir = Path(user_config_dir(self.app_name))
            self.data_dir = Path(user_data_dir(self.app_name))
        self.config_file = self.config_dir / "config.yaml"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        # Default configuration
        self._defaults = {
            "provisioning": {
                "server_type": DEFAULT_SERVER_TYPE,
                "version": DEFAULT_VERSION,
                "build": None,
                "server_dir": DEFAULT_SERVER_DIRECTORY,
                "plugins": [],
                "plugin_urls": [],
                "include_asp_plugin": True,
                "asp_branch": None,
            },
            "network": {
                "connect_timeout": CONNECT_TIMEOUT_SECONDS,
                "read_timeout": READ_TIMEOUT_SECONDS,
                "chunk_size": DOWNLOAD_CHUNK_SIZE,
            },
            "logging": {
                "level": "INFO",
                "file_logging": True,
                "log_file": str(self.data_dir / "logs" / "svsetup.log"),
                "max_log_size": "10MB",
                "backup_count": 5,
            },
            "ui": {
                "colored_output": True,
            }
        }

        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file or create default."""
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r') as f:
                    config = yaml.safe_load(f) or {}

                # Merge with defaults
                merged_config = self._merge_configs(self._defaults, config)

                logger.debug(f"Loaded configuration from {self.config_file}")
                return merged_config

            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config file: {e}. Using defaults.")
                return copy.deepcopy(self._defaults)
        else:
            # Create default config file
            self.save_config(self._defaults)
            return copy.deepcopy(self._defaults)

    def _merge_configs(self, defaults: Dict, user_config: Dict) -> Dict:
        """Recursively merge user config with defaults."""
        result = copy.deepcopy(defaults)

        for key, value in user_config.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        keys = key.split('.')
        value = self._config

        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot notation."""
        keys = key.split('.')
        config = self._config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def save_config(self, config: Optional[Dict] = None) -> bool:
        """Save configuration to file."""
        try:
            config_to_save = config or self._config

            with open(self.config_file, 'w') as f:
                yaml.safe_dump(config_to_save, f, default_flow_style=False, indent=2)

            logger.debug(f"Configuration saved to {self.config_file}")
            return True

        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to save configuration: {e}")
            return False

    def reset_to_defaults(self) -> None:
        """Reset configuration to defaults."""
        self._config = copy.deepcopy(self._defaults)
        self.save_config()
        logger.info("Configuration reset to defaults")

    def provisioning_settings(self, project_file: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
        """
        Provisioning settings, with a project file layered over the user config.

        Args:
            project_file: Optional YAML file holding a ``provisioning`` mapping

        Returns:
            Merged provisioning settings
        """
        settings = copy.deepcopy(self.get("provisioning", {}))
        if project_file is not None:
            settings.update(load_project_file(project_file))
        return _stringify_versions(settings)

    def get_log_directory(self) -> Path:
        """Get the log directory."""
        log_file = Path(self.get("logging.log_file"))
        log_dir = log_file.parent
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir


def load_project_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read the ``provisioning`` mapping of a per-project YAML file.

    Raises:
        ConfigurationError: If the file cannot be read or is malformed
    """
    path = Path(path)
    try:
        with open(path, 'r') as f:
            data = yaml.load(f, Loader=ProjectFileLoader) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read project file {path}", e) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Project file {path} must contain a mapping")
    settings = data.get("provisioning", {})
    if not isinstance(settings, dict):
        raise ConfigurationError(f"'provisioning' in {path} must be a mapping")
    return _stringify_versions(settings)


# Global configuration instance
config = Config()
