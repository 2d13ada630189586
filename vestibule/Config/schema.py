"""
Configuration schema for Vestibule.

Defines all configurable options with metadata for validation
and documentation.
"""

from enum import Enum
from typing import List, Any
from dataclasses import dataclass


class ConfigType(Enum):
    """Configuration value types."""
    STRING = "string"
    PATH = "path"          # File system path
    LIST = "list"          # Comma-separated values


class ConfigCategory(Enum):
    """Configuration categories for grouping."""
    PATHS = "paths"
    SERVER = "server"
    LOGGING = "logging"


@dataclass
class ConfigField:
    """Definition of a configuration field."""
    key: str
    description: str
    config_type: ConfigType
    category: ConfigCategory
    required: bool = False
    default: Any = None
    env_var: str = None          # Override env var name (defaults to key)
    options: List[str] = None    # For enumerated types

    def __post_init__(self):
        if self.env_var is None:
            self.env_var = self.key


# ==================== Schema Definition ====================

CONFIG_SCHEMA: List[ConfigField] = [
    # === Logging ===
    ConfigField(
        key="LOG_LEVEL",
        description="Log level for the vestibule loggers",
        config_type=ConfigType.STRING,
        category=ConfigCategory.LOGGING,
        default="INFO",
        options=["DEBUG", "INFO", "WARNING", "ERROR"],
    ),

    # === Paths ===
    ConfigField(
        key="MOUNTS_CONFIG",
        description="JSON file listing directories to attach on startup",
        config_type=ConfigType.PATH,
        category=ConfigCategory.PATHS,
        default="data/config/mounts.json",
    ),

    # === Server ===
    ConfigField(
        key="FILES_ROUTE_PREFIX",
        description="URL prefix the browse/read/download/debug endpoints are mounted under",
        config_type=ConfigType.STRING,
        category=ConfigCategory.SERVER,
        default="/files",
    ),
    ConfigField(
        key="CORS_ORIGINS",
        description="Origins allowed to call the HTTP API",
        config_type=ConfigType.LIST,
        category=ConfigCategory.SERVER,
        default="http://localhost:5000,http://localhost:8000",
    ),
]
