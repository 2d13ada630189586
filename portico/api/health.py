"""
Health check API endpoint.

Reports whether every attached path is still readable.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Response

from vestibule.NamespaceGate import Files


def create_router(files: Files) -> APIRouter:
    router = APIRouter()

    @router.get("/api/health")
    async def api_health(response: Response) -> Dict[str, Any]:
        """
        Get NamespaceGate health.

        Returns 200 when healthy, 503 when an attached path has gone
        missing or unreadable.
        """
        status = files.get_health_status()

        if not status["healthy"]:
            response.status_code = 503

        return status

    return router


__all__ = ["create_router"]
