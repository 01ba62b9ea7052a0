"""
Configuration for the crafting calculator.

Settings live in an optional YAML file merged over built-in defaults.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from craftcalc.errors import ConfigError

CONFIG_ENV_VAR = "CRAFTCALC_CONFIG"
DEFAULT_CONFIG_FILE = "craftcalc.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {"level": "INFO", "file": None},
    "display": {"decimal_places": 2, "show_stock": True},
    "storage": {"directory": "saved_plans"},
}


def _merge_configs(base: dict, override: dict) -> dict:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """Loads, queries and saves application configuration."""

    def __init__(self, config_path: Optional[str] = None):
        self.logger = logging.getLogger(__name__)

        if config_path:
            self.config_path = Path(config_path)
        elif os.environ.get(CONFIG_ENV_VAR):
            self.config_path = Path(os.environ[CONFIG_ENV_VAR])
        else:
            self.config_path = Path.cwd() / DEFAULT_CONFIG_FILE

        self._config: Optional[dict[str, Any]] = None

    def get_default_config(self) -> dict[str, Any]:
        return copy.deepcopy(DEFAULT_CONFIG)

    def load_config(self) -> dict[str, Any]:
        """Load the YAML file; a missing file means defaults."""
        if not self.config_path.exists():
            self.logger.debug("No config at %s, using defaults", self.config_path)
            self._config = self.get_default_config()
            return self._config

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config {self.config_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config {self.config_path} must be a mapping")

        self._config = _merge_configs(DEFAULT_CONFIG, data)
        self.logger.info("Configuration loaded from %s", self.config_path)
        return self._config

    def reset_to_defaults(self) -> dict[str, Any]:
        """Discard loaded values and use the built-in defaults."""
        self._config = self.get_default_config()
        return self._config

    def get_config(self) -> dict[str, Any]:
        """Current configuration, loading it on first use."""
        if self._config is None:
            return self.load_config()
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a value by dot notation, e.g. ``logging.level``."""
        value: Any = self.get_config()
        try:
            for part in key.split("."):
                value = value[part]
            return value
        except (KeyError, TypeError):
            return default

    def save_config(self, config: Optional[dict[str, Any]] = None) -> None:
        """Write configuration back to the YAML file."""
        if config is not None:
            self._config = config
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(self.get_config(), f, sort_keys=False)
        except OSError as e:
            raise ConfigError(f"Cannot write config {self.config_path}: {e}") from e
