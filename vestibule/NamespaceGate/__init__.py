"""
NamespaceGate - read-only virtual namespace over real directories.

Provides:
- Attach/detach of real paths under virtual names
- Longest-prefix resolution of virtual paths to canonical real paths
- Escape prevention (no resolution outside an attached root)
- Blocking file operations (listing, partial reads, download metadata)

Usage:
    from vestibule.NamespaceGate import Files

    files = Files()
    ok, message = await files.attach("/var/log/app", "logs")

    resolved = await files.resolve("logs/app.log")
    if resolved.is_found:
        chunk = await asyncio.to_thread(read_chunk, resolved.path, "logs/app.log", 0, 4096)

    await files.detach("logs")
"""

import asyncio
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, List, Dict, Any, Tuple

from vestibule.shared.gate import GateLogger, build_health_status

from .models import (
    NamespaceEntry,
    ResolutionStatus,
    ResolvedPath,
    FileDescriptor,
    ReadChunk,
    MountConfig,
    MountsConfig,
)
from .security import (
    FileAccessError,
    canonicalize,
    check_read_access,
    clean_virtual_name,
    is_within_root,
)
from .resolver import resolve_virtual_path
from .operations import (
    READ_CAP_BYTES,
    list_directory,
    read_chunk,
    download_target,
)
from .mime import MIME_TYPES, DEFAULT_MIME_TYPE, guess_mime_type

_log = GateLogger.get("NamespaceGate")

# Canonicalization for attach/resolve; file reads use the default executor
_namespace_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="namespace_")


async def _in_namespace_executor(func, *args):
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(_namespace_executor, func, *args)


def _validate_attach_target(path: str) -> Tuple[Optional[str], Optional[str]]:
    """Canonicalize and access-check a path. Returns (real_path, error)."""
    try:
        real_path = canonicalize(path)
    except OSError as e:
        return None, f"Failed to get realpath of '{path}': {e.strerror or e}"

    readable, error = check_read_access(real_path)
    if not readable:
        return None, f"Failed to access '{path}': {error}"

    return real_path, None


class Files:
    """
    One virtual namespace and the operations over it.

    Every read or write of the mapping goes through a single asyncio lock,
    so attach/detach/resolve are observed one at a time. Canonicalization
    runs outside the lock on a dedicated thread pool; listings and reads
    run on the event loop's default executor.
    """

    def __init__(self):
        self._paths: Dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def attach(self, path: str, name: str) -> Tuple[bool, str]:
        """
        Attach a real path under a virtual name.

        An existing attachment under the same name is replaced.

        Args:
            path: Real file or directory path
            name: Virtual name; trailing slashes are dropped

        Returns:
            Tuple of (success, message)
        """
        real_path, error = await _in_namespace_executor(_validate_attach_target, path)
        if error:
            _log.warning(error)
            return False, error

        name = clean_virtual_name(name)
        async with self._lock:
            self._paths[name] = real_path

        _log.info(f"Attached '{real_path}' as '{name}'")
        return True, f"Attached '{name}'"

    async def detach(self, name: str) -> None:
        """Remove a virtual name. Unknown names are ignored."""
        async with self._lock:
            removed = self._paths.pop(name, None)

        if removed is not None:
            _log.info(f"Detached '{name}'")

    async def debug_snapshot(self) -> Dict[str, str]:
        """Copy of the current virtual name -> real path mapping."""
        async with self._lock:
            return dict(self._paths)

    async def entries(self) -> List[NamespaceEntry]:
        """Current attachments as NamespaceEntry models."""
        snapshot = await self.debug_snapshot()
        return [
            NamespaceEntry(virtual_name=name, real_path=real)
            for name, real in sorted(snapshot.items())
        ]

    async def resolve(self, virtual_path: str) -> ResolvedPath:
        """
        Resolve a virtual path against the namespace as it stands now.

        See resolver.resolve_virtual_path for the algorithm.
        """
        async with self._lock:
            paths = dict(self._paths)
        return await _in_namespace_executor(resolve_virtual_path, paths, virtual_path)

    # ==================== Health Checks ====================

    def _check_paths(self) -> Dict[str, bool]:
        return {
            f"mount_{name}": os.path.exists(real) and os.access(real, os.R_OK)
            for name, real in list(self._paths.items())
        }

    def get_health_status(self) -> Dict[str, Any]:
        """Get detailed health information."""
        checks = self._check_paths()
        return build_health_status(
            gate_name="NamespaceGate",
            initialized=True,
            dependencies=self.get_dependencies(),
            checks=checks,
            details={
                "mount_count": len(checks),
                "read_cap_bytes": READ_CAP_BYTES,
            },
        )

    def get_dependencies(self) -> List[str]:
        """List external dependencies."""
        return ["filesystem"]


# Global instance
_files: Optional[Files] = None


def get_files() -> Files:
    """Get or create the process-wide default Files instance."""
    global _files
    if _files is None:
        _files = Files()
    return _files


def _reset():
    """Drop the default instance (tests)."""
    global _files
    _files = None


__all__ = [
    "Files",
    "get_files",
    # Models
    "NamespaceEntry",
    "ResolutionStatus",
    "ResolvedPath",
    "FileDescriptor",
    "ReadChunk",
    "MountConfig",
    "MountsConfig",
    # Security
    "FileAccessError",
    "canonicalize",
    "is_within_root",
    # Resolution and operations
    "resolve_virtual_path",
    "list_directory",
    "read_chunk",
    "download_target",
    "READ_CAP_BYTES",
    # MIME
    "MIME_TYPES",
    "DEFAULT_MIME_TYPE",
    "guess_mime_type",
]
