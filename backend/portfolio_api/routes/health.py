"""
Portfolio API Backend: Health Check and Root Routes
===================================================

What:  GET /api/health for monitoring probes and GET / as a service banner.
How:   Pings MongoDB and reports the result alongside uptime.
Who:   Called by uptime monitors, the hosting platform, and curious humans.

Health semantics:
    The endpoint always answers 200 with status "OK". An unreachable
    database only flips `database` to "disconnected".
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from portfolio_api.schemas.common import HealthResponse, RootResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Process start, for uptime reporting
_start_time = time.time()

SERVICE_MESSAGE = "Shannah Portfolio API is running!"

PUBLIC_ENDPOINTS = ["/api/health", "/api/portfolio", "/api/blog", "/api/contact"]


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports liveness, database connectivity and uptime. Never fails.",
)
async def health_check(request: Request) -> HealthResponse:
    """
    Check process liveness and database connectivity.

    Check details:
        Database: `ping` admin command, bounded by the client's
                  server-selection timeout
    """
    database = getattr(request.app.state, "database", None)
    connected = await database.is_connected() if database is not None else False
    if not connected:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc),
        database="connected" if connected else "disconnected",
        uptime=round(time.time() - _start_time, 3),
        message=SERVICE_MESSAGE,
    )


@router.get("/", response_model=RootResponse, summary="Service banner")
async def root() -> RootResponse:
    return RootResponse(
        message="Shannah Portfolio API Server",
        status="running",
        endpoints=PUBLIC_ENDPOINTS,
    )
