"""
NamespaceGate file operations.

Blocking filesystem work done on canonical paths returned by the
resolver: directory listings, partial reads and download metadata.
These run in worker threads; messages refer to virtual paths only.
"""

import mmap
import os
import posixpath
import stat
from typing import Dict, List, Optional, Tuple

from vestibule.shared.gate import GateLogger

from .mime import guess_mime_type
from .models import FileDescriptor, ReadChunk
from .security import FileAccessError

_log = GateLogger.get("NamespaceGate")

# Reads are capped at 16 memory pages
READ_CAP_PAGES = 16
READ_CAP_BYTES = mmap.PAGESIZE * READ_CAP_PAGES


def _reason(error: OSError) -> str:
    return error.strerror or str(error)


def describe(virtual_path: str, st: os.stat_result) -> FileDescriptor:
    """Build a browse descriptor from a stat result."""
    return FileDescriptor(
        name=virtual_path,
        path=virtual_path,
        dir=stat.S_ISDIR(st.st_mode),
        size=st.st_size,
        mode=stat.filemode(st.st_mode),
        mtime=st.st_mtime,
        nlink=st.st_nlink,
        uid=st.st_uid,
        gid=st.st_gid,
    )


def list_directory(real_dir: str, virtual_path: str) -> List[FileDescriptor]:
    """
    List the immediate children of a directory.

    Args:
        real_dir: Canonical directory path
        virtual_path: Virtual path the client asked for

    Returns:
        One descriptor per child, ordered by the child's real path.
        Children that vanish or cannot be stat'ed are skipped. A
        non-directory lists as empty.

    Raises:
        FileAccessError: if the directory cannot be listed
    """
    if not os.path.isdir(real_dir):
        return []

    try:
        entries = os.listdir(real_dir)
    except OSError as e:
        raise FileAccessError(f"Failed to list '{virtual_path}': {_reason(e)}") from e

    files: Dict[str, FileDescriptor] = {}
    for entry in entries:
        full_path = os.path.join(real_dir, entry)
        child = posixpath.join(virtual_path, entry)

        try:
            st = os.stat(full_path)
        except OSError as e:
            _log.warning(f"Found '{child}' in listing but stat failed: {_reason(e)}")
            continue

        files[full_path] = describe(child, st)

    return [files[key] for key in sorted(files)]


def read_chunk(
    real_path: str,
    virtual_path: str,
    offset: Optional[int] = None,
    length: Optional[int] = None,
) -> ReadChunk:
    """
    Read up to `length` bytes at `offset`.

    Args:
        real_path: Canonical path of a regular file
        virtual_path: Virtual path the client asked for
        offset: Byte offset, defaults to the file size (a size probe)
        length: Bytes to read, defaults to the rest of the file;
            always capped at READ_CAP_BYTES

    Returns:
        ReadChunk; when offset is at or past the end this is
        {offset: size, data: ""}

        The bytes are decoded as UTF-8, so len(data) counts characters,
        not bytes, once the chunk holds non-ASCII text.

    Raises:
        FileAccessError: if the file cannot be opened, sized, sought or read
    """
    try:
        f = open(real_path, "rb")
    except OSError as e:
        _log.warning(f"Failed to open file at '{virtual_path}': {_reason(e)}")
        raise FileAccessError(f"Failed to open file at '{virtual_path}': {_reason(e)}") from e

    with f:
        try:
            size = f.seek(0, os.SEEK_END)
        except OSError as e:
            _log.warning(f"Failed to size file at '{virtual_path}': {_reason(e)}")
            raise FileAccessError(f"Failed to size file at '{virtual_path}': {_reason(e)}") from e

        if offset is None:
            offset = size

        if length is None:
            length = size - offset

        length = min(length, READ_CAP_BYTES)

        if offset >= size:
            return ReadChunk(offset=size, data="")

        try:
            f.seek(offset)
        except OSError as e:
            _log.warning(f"Failed to seek file at '{virtual_path}': {_reason(e)}")
            raise FileAccessError(f"Failed to seek file at '{virtual_path}': {_reason(e)}") from e

        try:
            data = f.read(length)
        except OSError as e:
            _log.warning(f"Failed to read file at '{virtual_path}': {_reason(e)}")
            raise FileAccessError(f"Failed to read file at '{virtual_path}': {_reason(e)}") from e

    # invalid or split UTF-8 sequences become U+FFFD
    return ReadChunk(offset=offset, data=data.decode("utf-8", errors="replace"))


def download_target(real_path: str, virtual_path: str) -> Tuple[str, str]:
    """
    Work out the attachment filename and content type for a download.

    Returns:
        Tuple of (basename, mime_type)

    Raises:
        FileAccessError: if the path has no basename
    """
    basename = os.path.basename(real_path)
    if not basename:
        _log.error(f"Cannot determine basename of '{virtual_path}'")
        raise FileAccessError(f"Cannot determine basename of '{virtual_path}'")

    return basename, guess_mime_type(basename)
