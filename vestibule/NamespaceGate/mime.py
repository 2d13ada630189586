"""Static extension -> MIME type table used for downloads."""

import os
from types import MappingProxyType
from typing import Mapping

DEFAULT_MIME_TYPE = "application/octet-stream"

MIME_TYPES: Mapping[str, str] = MappingProxyType({
    ".323": "text/h323",
    ".3gp": "video/3gpp",
    ".7z": "application/x-7z-compressed",
    ".aac": "audio/aac",
    ".asc": "text/plain",
    ".avi": "video/x-msvideo",
    ".bin": "application/octet-stream",
    ".bmp": "image/bmp",
    ".bz2": "application/x-bzip2",
    ".c": "text/plain",
    ".cc": "text/plain",
    ".conf": "text/plain",
    ".cpp": "text/plain",
    ".css": "text/css",
    ".csv": "text/csv",
    ".deb": "application/x-debian-package",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".eps": "application/postscript",
    ".flac": "audio/flac",
    ".gif": "image/gif",
    ".gz": "application/x-gzip",
    ".h": "text/plain",
    ".hpp": "text/plain",
    ".htm": "text/html",
    ".html": "text/html",
    ".ico": "image/x-icon",
    ".ini": "text/plain",
    ".jar": "application/java-archive",
    ".java": "text/plain",
    ".jpe": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".jpg": "image/jpeg",
    ".js": "application/javascript",
    ".json": "application/json",
    ".log": "text/plain",
    ".md": "text/markdown",
    ".mid": "audio/midi",
    ".midi": "audio/midi",
    ".mov": "video/quicktime",
    ".mp3": "audio/mpeg",
    ".mp4": "video/mp4",
    ".mpeg": "video/mpeg",
    ".mpg": "video/mpeg",
    ".odt": "application/vnd.oasis.opendocument.text",
    ".ogg": "audio/ogg",
    ".otf": "font/otf",
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".ppt": "application/vnd.ms-powerpoint",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    ".ps": "application/postscript",
    ".py": "text/plain",
    ".rar": "application/x-rar-compressed",
    ".rpm": "application/x-rpm",
    ".rtf": "application/rtf",
    ".sh": "application/x-sh",
    ".svg": "image/svg+xml",
    ".tar": "application/x-tar",
    ".tgz": "application/x-gzip",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
    ".ttf": "font/ttf",
    ".txt": "text/plain",
    ".wav": "audio/wav",
    ".webm": "video/webm",
    ".webp": "image/webp",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".xhtml": "application/xhtml+xml",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".xml": "application/xml",
    ".yaml": "text/plain",
    ".yml": "text/plain",
    ".zip": "application/zip",
})


def guess_mime_type(filename: str) -> str:
    """Look up the MIME type for a filename by its last extension."""
    _, ext = os.path.splitext(filename)
    return MIME_TYPES.get(ext, DEFAULT_MIME_TYPE)
