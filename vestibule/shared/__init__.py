"""
Shared utilities for Vestibule.

Provides access to common functionality used across Gate implementations.
"""

from vestibule.shared.gate import (
    GateLogger,
    ConfigLoader,
    build_health_status,
)

__all__ = [
    "GateLogger",
    "ConfigLoader",
    "build_health_status",
]
