"""
Shared Gate utilities for Vestibule.

- GateLogger: one logger per gate under the "vestibule" root
- build_health_status: the health dict every gate reports
- ConfigLoader: JSON config files -> pydantic models
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar, Union


ROOT_LOGGER = "vestibule"
LOG_FORMAT = "[%(name)s] %(levelname)s: %(message)s"


class GateLogger:
    """Namespaced loggers for gates, sharing one stream handler on the root."""

    _loggers: Dict[str, logging.Logger] = {}
    _root: Optional[logging.Logger] = None

    @classmethod
    def _root_logger(cls) -> logging.Logger:
        if cls._root is None:
            root = logging.getLogger(ROOT_LOGGER)
            if not root.handlers:
                handler = logging.StreamHandler()
                handler.setFormatter(logging.Formatter(LOG_FORMAT))
                root.addHandler(handler)
                root.setLevel(logging.INFO)
            cls._root = root
        return cls._root

    @classmethod
    def get(cls, gate_name: str) -> logging.Logger:
        """Logger named "vestibule.<gate_name>"."""
        cls._root_logger()
        name = f"{ROOT_LOGGER}.{gate_name}"
        return cls._loggers.setdefault(name, logging.getLogger(name))

    @classmethod
    def set_level(cls, level: Union[int, str], gate_name: Optional[str] = None):
        """
        Set the level of one gate, or of every gate when gate_name is None.

        Level names are case-insensitive; unknown names fall back to INFO.
        """
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
            if not isinstance(level, int):
                level = logging.INFO

        logger = cls.get(gate_name) if gate_name else cls._root_logger()
        logger.setLevel(level)


def build_health_status(
    gate_name: str,
    initialized: bool,
    dependencies: List[str],
    checks: Dict[str, bool],
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Health dict: healthy only when initialized and every check passed."""
    return {
        "gate": gate_name,
        "healthy": initialized and all(checks.values()),
        "initialized": initialized,
        "dependencies": dependencies,
        "checks": checks,
        "details": details or {},
    }


ConfigT = TypeVar("ConfigT")


class ConfigLoader:
    """Loads JSON config files into pydantic config models."""

    @staticmethod
    def load(
        path: Union[str, Path],
        model_class: Type[ConfigT],
        create_default: bool = True,
    ) -> Optional[ConfigT]:
        """
        Load a JSON config file into `model_class`.

        A missing file yields model_class() (or None without create_default).
        A file that is not valid JSON or does not fit the model is logged
        and yields None.
        """
        path = Path(path)

        if not path.exists():
            return model_class() if create_default else None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return model_class.model_validate(data)
        except (OSError, ValueError) as e:
            # pydantic's ValidationError and json's JSONDecodeError are ValueErrors
            GateLogger.get("ConfigLoader").error(f"Failed to load config from {path}: {e}")
            return None
