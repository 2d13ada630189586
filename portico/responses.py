from __future__ import annotations

import json
import re
from typing import Any

from fastapi import HTTPException
from fastapi.responses import JSONResponse, Response

# Callback names must look like a JavaScript identifier path (cb, $.cb, a.b_1)
_JSONP_CALLBACK = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")


def json_response(content: Any, jsonp: str | None = None) -> Response:
    """
    Encode `content` as JSON, or as a JSONP call when `jsonp` is given.

    JSONP bodies are `<callback>(<json>);` served as text/javascript.
    """
    if not jsonp:
        return JSONResponse(content=content)

    if not _JSONP_CALLBACK.match(jsonp):
        raise HTTPException(status_code=400, detail="Invalid 'jsonp' callback name.")

    body = f"{jsonp}({json.dumps(content)});"
    return Response(content=body, media_type="text/javascript")


__all__ = ["json_response"]
