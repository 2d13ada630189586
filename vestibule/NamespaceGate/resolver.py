"""
NamespaceGate resolver.

Maps a virtual path onto a canonical real path using the longest
attached prefix.

Suppose /1/2/hello_world.txt exists and /1/2 is attached as "sandbox":

    resolve_virtual_path({"sandbox": "/1/2"}, "sandbox/hello_world.txt")
    -> ResolvedPath(status=FOUND, path="/1/2/hello_world.txt")
"""

import os
from typing import List, Mapping

from .models import ResolvedPath
from .security import canonicalize, clean_virtual_name, is_within_root


def _os_reason(error: OSError) -> str:
    return error.strerror or error.__class__.__name__


def resolve_virtual_path(paths: Mapping[str, str], virtual_path: str) -> ResolvedPath:
    """
    Resolve `virtual_path` against the `paths` namespace.

    Prefixes are tried from longest to shortest; segments that do not
    match are carried over as a suffix joined onto the attached target.

    Args:
        paths: Namespace mapping of virtual name -> canonical real path
        virtual_path: Path requested by the client

    Returns:
        ResolvedPath that is FOUND (canonical path), NOT_FOUND, or ERROR
        when the target cannot be canonicalized or escapes its root.
        Error messages name the virtual path only.
    """
    tokens = clean_virtual_name(virtual_path).split("/")
    suffix: List[str] = []

    while tokens:
        prefix = "/".join(tokens)

        if prefix not in paths:
            suffix.insert(0, tokens.pop())
            continue

        target = paths[prefix]

        if not os.path.isdir(target):
            # A file attached but addressed as a directory; reported as
            # missing rather than malformed.
            if any(suffix):
                return ResolvedPath.not_found()
            return ResolvedPath.found(target)

        candidate = os.path.join(target, *[s for s in suffix if s])

        try:
            real = canonicalize(candidate)
        except OSError as e:
            return ResolvedPath.failed(
                f"Failed to determine canonical path of '{virtual_path}': {_os_reason(e)}"
            )

        if not is_within_root(real, target):
            return ResolvedPath.failed(f"'{virtual_path}' is inaccessible")

        return ResolvedPath.found(real)

    return ResolvedPath.not_found()
