from __future__ import annotations

import asyncio
import os
import re
from urllib.parse import quote

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from vestibule.NamespaceGate import (
    FileAccessError,
    Files,
    ResolvedPath,
    download_target,
    list_directory,
    read_chunk,
)
from portico.responses import json_response


def _require_path(path: str | None) -> str:
    if not path:
        raise HTTPException(status_code=400, detail="Expecting 'path=value' in query.")
    return path


_INTEGER = re.compile(r"-?[0-9]+")


def _parse_int(name: str, raw: str | None) -> int | None:
    """Parse an optional non-negative integer query parameter (plain decimal digits only)."""
    if raw is None:
        return None
    if not _INTEGER.fullmatch(raw):
        raise HTTPException(
            status_code=400, detail=f"Failed to parse {name}: '{raw}' is not an integer."
        )
    value = int(raw)
    if value < 0:
        raise HTTPException(status_code=400, detail=f"Failed to parse {name}: must not be negative.")
    return value


def _content_disposition(filename: str) -> str:
    try:
        filename.encode("latin-1")
    except UnicodeEncodeError:
        return f"attachment; filename*=UTF-8''{quote(filename)}"
    return f"attachment; filename={filename}"


def _raise_unresolved(resolved: ResolvedPath, error_status: int) -> None:
    if resolved.is_error:
        raise HTTPException(status_code=error_status, detail=f"{resolved.error}.")
    if resolved.is_not_found:
        raise HTTPException(status_code=404, detail="Not Found")


def create_router(files: Files) -> APIRouter:
    router = APIRouter()

    @router.get("/browse")
    @router.get("/browse.json")
    async def api_browse(path: str | None = None, jsonp: str | None = None):
        """List a directory: [{"name", "path", "dir", "size", ...}, ...] sorted by real path."""
        path = _require_path(path)

        resolved = await files.resolve(path)
        _raise_unresolved(resolved, error_status=500)

        try:
            listing = await asyncio.to_thread(list_directory, resolved.path, path)
        except FileAccessError as e:
            raise HTTPException(status_code=500, detail=f"{e}.")

        return json_response([f.to_dict() for f in listing], jsonp)

    @router.get("/read")
    @router.get("/read.json")
    async def api_read(
        path: str | None = None,
        offset: str | None = None,
        length: str | None = None,
        jsonp: str | None = None,
    ):
        """
        Read `length` bytes at `offset`: {"offset", "data"}.

        Without an offset this reports the file size and no data.
        """
        path = _require_path(path)
        start = _parse_int("offset", offset)
        count = _parse_int("length", length)

        resolved = await files.resolve(path)
        _raise_unresolved(resolved, error_status=400)

        if await asyncio.to_thread(os.path.isdir, resolved.path):
            raise HTTPException(status_code=400, detail="Cannot read a directory.")

        try:
            chunk = await asyncio.to_thread(read_chunk, resolved.path, path, start, count)
        except FileAccessError as e:
            raise HTTPException(status_code=500, detail=f"{e}.")

        return json_response(chunk.to_dict(), jsonp)

    @router.get("/download")
    @router.get("/download.json")
    async def api_download(path: str | None = None):
        """Send the whole file as an attachment."""
        path = _require_path(path)

        resolved = await files.resolve(path)
        _raise_unresolved(resolved, error_status=500)

        if await asyncio.to_thread(os.path.isdir, resolved.path):
            raise HTTPException(status_code=400, detail="Cannot download a directory.")

        try:
            basename, media_type = download_target(resolved.path, path)
        except FileAccessError as e:
            raise HTTPException(status_code=500, detail=f"{e}.")

        return FileResponse(
            resolved.path,
            media_type=media_type,
            # an explicit Content-Type keeps Starlette from appending a charset
            headers={
                "Content-Type": media_type,
                "Content-Disposition": _content_disposition(basename),
            },
        )

    @router.get("/debug")
    @router.get("/debug.json")
    async def api_debug(jsonp: str | None = None):
        """The virtual name -> real path mapping."""
        return json_response(await files.debug_snapshot(), jsonp)

    return router


__all__ = ["create_router"]
