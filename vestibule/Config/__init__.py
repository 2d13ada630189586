"""
Vestibule Configuration Manager.

Each schema key is read from the environment (a .env file is loaded
first), then data/config.json, then the schema default. Relative PATH
values are anchored at the project root.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv

from vestibule.shared.gate import GateLogger

_log = GateLogger.get("Config")

from vestibule.Config.schema import (
    CONFIG_SCHEMA,
    ConfigField,
    ConfigType,
    ConfigCategory,
)


PROJECT_ROOT = Path(__file__).resolve().parents[2]
ENV_FILE = PROJECT_ROOT / ".env"
CONFIG_JSON = PROJECT_ROOT / "data" / "config.json"


class ConfigManager:
    """Resolved configuration values, keyed by schema key."""

    def __init__(self):
        self._values: Dict[str, Any] = {}
        self._load()

    def _read_json(self) -> Dict[str, Any]:
        if not CONFIG_JSON.exists():
            return {}
        try:
            with open(CONFIG_JSON) as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            _log.warning(f"Ignoring unreadable {CONFIG_JSON}: {e}")
            return {}

    def _load(self):
        load_dotenv(ENV_FILE)
        json_config = self._read_json()

        for field in CONFIG_SCHEMA:
            value = os.environ.get(field.env_var)
            if value is None:
                value = json_config.get(field.key, field.default)
            self._values[field.key] = self._convert(value, field.config_type)

    @staticmethod
    def _convert(value: Any, config_type: ConfigType) -> Any:
        if value is None or value == "":
            return None

        if config_type == ConfigType.LIST:
            if isinstance(value, list):
                return value
            return [v.strip() for v in str(value).split(",") if v.strip()]

        if config_type == ConfigType.PATH:
            path = Path(os.path.expanduser(str(value)))
            return str(path if path.is_absolute() else PROJECT_ROOT / path)

        return str(value)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        value = self._values.get(key)
        return default if value is None else value

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Validate configuration.

        Returns:
            (is_valid, list of error messages)
        """
        errors = []

        for field in CONFIG_SCHEMA:
            value = self._values.get(field.key)

            if field.required and value is None:
                errors.append(f"Required config missing: {field.key}")
            elif value is not None and field.options and str(value).upper() not in field.options:
                errors.append(f"Invalid option for {field.key}: {value}")

        return len(errors) == 0, errors


# Global instance
_manager: Optional[ConfigManager] = None


def get_manager() -> ConfigManager:
    """Get or create the global ConfigManager."""
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager


def reload():
    """Reload configuration from files."""
    global _manager
    _manager = ConfigManager()


def get(key: str, default: Any = None) -> Any:
    """Get a config value."""
    return get_manager().get(key, default)


def validate() -> Tuple[bool, List[str]]:
    """Validate the current configuration."""
    return get_manager().validate()


__all__ = [
    "ConfigManager",
    "ConfigField",
    "ConfigType",
    "ConfigCategory",
    "CONFIG_SCHEMA",
    "PROJECT_ROOT",
    "get_manager",
    "reload",
    "get",
    "validate",
]
