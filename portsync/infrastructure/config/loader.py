"""
Configuration loading and saving utilities.

Configuration comes from an optional YAML or JSON file, overlaid with
``PORTSYNC_*`` environment variables.
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

import yaml

from ...core.exceptions import ConfigError
from .models import ApplicationConfig


class ConfigLoader:
    """Configuration loader supporting YAML, JSON and the environment."""

    def __init__(self, env_prefix: str = "PORTSYNC_") -> None:
        self._env_prefix = env_prefix

    def load_config(self, config_file: Optional[str] = None) -> ApplicationConfig:
        """
        Load configuration from file and environment variables.

        Args:
            config_file: Path to configuration file (optional)

        Returns:
            Loaded and validated configuration

        Raises:
            ConfigError: If the file cannot be read or a value is invalid
        """
        config_data: Dict[str, Any] = {}

        if config_file:
            config_data = self._load_from_file(config_file)

        env_overrides = self._load_from_environment()
        config_data = self._merge_configs(config_data, env_overrides)
        config_data['config_file_path'] = config_file

        try:
            return ApplicationConfig.from_dict(config_data)
        except ValueError as e:
            raise ConfigError(str(e), details={'file': config_file}) from e

    def _load_from_file(self, file_path: str) -> Dict[str, Any]:
        """Load configuration from file."""
        path = Path(file_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {file_path}")

        suffix = path.suffix.lower()
        if suffix not in ('.yaml', '.yml', '.json'):
            raise ConfigError(
                f"Unsupported configuration file format: {path.suffix}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                if suffix == '.json':
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"Invalid configuration in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Error reading {file_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration in {file_path} must be a mapping, got {type(data).__name__}")
        return data

    def _load_from_environment(self) -> Dict[str, Any]:
        """Load configuration overrides from environment variables."""
        config: Dict[str, Any] = {}

        env_mappings: Dict[str, Tuple[str, Callable[[str], Any]]] = {
            f"{self._env_prefix}DEBUG": ("debug", self._parse_bool),
            f"{self._env_prefix}MACHINE_BINARY": ("machine.binary", str),
            f"{self._env_prefix}MANAGEMENT_PORT": ("machine.management_port", int),
            f"{self._env_prefix}SSH_VERBOSE": ("machine.ssh_verbose", self._parse_bool),
            f"{self._env_prefix}INCLUDE_STOPPED": ("machine.include_stopped", self._parse_bool),
            f"{self._env_prefix}POLL_INTERVAL": ("reconciler.poll_interval", float),
            f"{self._env_prefix}SHUTDOWN_TIMEOUT": ("reconciler.shutdown_timeout", float),
            f"{self._env_prefix}LOG_LEVEL": ("logging.level", str),
            f"{self._env_prefix}LOG_DIR": ("logging.log_directory", str),
            f"{self._env_prefix}LOG_FILE": ("logging.file_enabled", self._parse_bool),
        }

        for env_var, (config_path, converter) in env_mappings.items():
            value = os.getenv(env_var)
            if value is not None:
                try:
                    converted_value = converter(value)
                except (ValueError, TypeError) as e:
                    raise ConfigError(
                        f"Invalid value for {env_var}: {value} ({e})") from e
                self._set_nested_value(config, config_path, converted_value)

        return config

    def _parse_bool(self, value: str) -> bool:
        """Parse boolean value from string."""
        return value.lower() in ('true', '1', 'yes', 'on', 'enabled')

    def _set_nested_value(self, config: Dict[str, Any], path: str, value: Any) -> None:
        """Set a nested configuration value using dot notation."""
        keys = path.split('.')
        current = config

        for key in keys[:-1]:
            current = current.setdefault(key, {})

        current[keys[-1]] = value

    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge two configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result
