from __future__ import annotations

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vestibule import Config
from vestibule.NamespaceGate import Files, get_files
from portico import lifecycle
from portico.api import files as files_api
from portico.api import health as health_api


def create_app(files: Files | None = None) -> FastAPI:
    """
    Build the HTTP application over a Files namespace.

    Args:
        files: Namespace to serve; defaults to the process-wide instance.
            Pass a fresh Files() to get an independent namespace.
    """
    files = files if files is not None else get_files()

    app = FastAPI(title="Vestibule")
    app.state.files = files

    @app.on_event("startup")
    async def startup_event():
        await lifecycle.startup(files)

    @app.on_event("shutdown")
    async def shutdown_event():
        await lifecycle.shutdown(files)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.get("CORS_ORIGINS", []),
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    prefix = Config.get("FILES_ROUTE_PREFIX", "").rstrip("/")
    app.include_router(files_api.create_router(files), prefix=prefix)
    app.include_router(health_api.create_router(files))

    return app


app = create_app()
