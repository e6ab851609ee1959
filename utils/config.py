"""
config.py

Configuration management for eventrender.
Loads settings from config.yaml and provides access throughout the application.
"""

import copy
import yaml
from pathlib import Path
from typing import Any, Dict, Optional


DEFAULT_CONFIG: Dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "console_output": True,
        "file_output": False,
        "max_log_size_mb": 10,
        "backup_count": 5,
    },
    "paths": {
        "logs_dir": "logs",
    },
    "syslog": {
        "hostname": None,
        "app_name": "eventrender",
        "procid": None,
        "facility": "local0",
        "severity_by_level": {
            "low": "notice",
            "medium": "warning",
            "high": "error",
        },
    },
    "display": {
        "color": False,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay ``override`` onto a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """
    Singleton configuration manager that loads and provides access to settings.
    """

    _instance = None
    _config: Dict[str, Any] = {}
    source: Optional[Path] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self, config_path: Path = Path("config.yaml")) -> None:
        """Load configuration from config.yaml, falling back to defaults."""
        if not config_path.exists():
            self._config = copy.deepcopy(DEFAULT_CONFIG)
            self.source = None
            return

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}")

        if not isinstance(loaded, dict):
            raise ValueError(f"Invalid configuration in {config_path}: expected a mapping")

        self._config = _merge(DEFAULT_CONFIG, loaded)
        self.source = config_path

    def reload(self, config_path: str) -> None:
        """Replace the active settings with the ones in ``config_path``."""
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        self._load_config(path)

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Example:
            config.get("syslog.app_name")
            config.get("logging.level")
        """
        keys = key_path.split(".")
        value = self._config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def get_all(self) -> Dict[str, Any]:
        """Return the entire configuration dictionary."""
        return copy.deepcopy(self._config)


# Create a global instance for easy import
config = ConfigManager()
