"""
NamespaceGate security module.

Provides canonicalization, the root containment check used to stop
traversal and symlink escapes, and read access checks.
"""

import os
from typing import Tuple, Optional


class FileAccessError(Exception):
    """Raised when a resolved file cannot be opened, sought or read."""
    pass


def canonicalize(path: str) -> str:
    """
    Resolve a path to its canonical absolute form.

    Expands a leading ~, resolves symlinks and . / .. segments. The path
    must exist.

    Raises:
        OSError: if any component is missing or cannot be resolved
    """
    return os.path.realpath(os.path.expanduser(path), strict=True)


def is_within_root(path: str, root: str) -> bool:
    """
    Check that canonical `path` is `root` itself or lies beneath it.

    This is a path-component test: /a/bfoo is not inside /a/b.
    """
    try:
        return os.path.commonpath([root, path]) == root
    except ValueError:
        # Mixed absolute/relative paths or different drives on Windows
        return False


def check_read_access(path: str) -> Tuple[bool, Optional[str]]:
    """
    Check the service can read a canonical path.

    Returns:
        Tuple of (is_readable, error_message)
    """
    if not os.access(path, os.R_OK):
        return False, "Access denied"
    return True, None


def clean_virtual_name(name: str) -> str:
    """Strip trailing separators from a virtual name or path."""
    return name.rstrip("/")
