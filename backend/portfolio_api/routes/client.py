"""
Portfolio API Backend: Client Application Fallback
==================================================

What:  Serves the pre-built client application in production.
How:   A catch-all GET route registered after every API route: an existing
       file inside the build directory is returned as-is, anything else
       gets the build's index.html so client-side routing can take over.
When:  Only registered when ENVIRONMENT=production.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, FastAPI
from fastapi.responses import FileResponse

from portfolio_api.exceptions import FileStorageError

logger = logging.getLogger(__name__)


def build_client_router(build_dir: str) -> APIRouter:
    """Router serving `build_dir` with an index.html fallback."""
    root = Path(build_dir).resolve()
    index_file = root / "index.html"
    router = APIRouter(tags=["Client"])

    @router.get("/{full_path:path}", include_in_schema=False)
    async def serve_client(full_path: str) -> FileResponse:
        candidate = (root / full_path).resolve()
        # Only files inside the build directory are served directly
        if full_path and candidate.is_relative_to(root) and candidate.is_file():
            return FileResponse(candidate)
        if not index_file.is_file():
            raise FileStorageError(
                message="Client build is missing index.html",
                context={"build_dir": str(root)},
            )
        return FileResponse(index_file)

    return router


def register_client_fallback(app: FastAPI, build_dir: str) -> None:
    """Attach the SPA fallback; must be called after all other routes."""
    app.include_router(build_client_router(build_dir))
    logger.info("Serving client build from %s", Path(build_dir).resolve())
