"""
Portfolio API Backend: Request Logging Middleware
=================================================

What:  One access-log line per HTTP request.
How:   Measures wall time around the downstream app and logs method, path,
       status, duration, request ID and client IP. The level follows the
       status class: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
When:  Inside RequestIDMiddleware, so the request ID is already set.

Unhandled exceptions:
    An exception no handler claimed is logged with its traceback and turned
    into the standard 500 error body here, inside the CORS and request-ID
    middleware, so the response still carries both headers.

Example line:
    2024-01-15T12:00:00 [INFO] portfolio_api.access: POST /api/portfolio 201 12.4ms [1a2b3c4d] from 127.0.0.1

Request bodies and uploaded file contents are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from portfolio_api.exceptions import error_response
from portfolio_api.middleware.request_id import request_id_var

logger = logging.getLogger("portfolio_api.access")

# Polled by monitors every few seconds; not worth an access line each time
QUIET_PATHS = {"/api/health"}


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("Unhandled error on %s %s [%s]: %s", request.method, path, rid, str(e), exc_info=True)
            response = error_response(500, str(e), "internal_server_error")

        if path in QUIET_PATHS:
            return response

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
