"""
Portfolio API Backend: Request ID Middleware
============================================

What:  Tags every request with a short correlation ID.
How:   Reuses a client-supplied X-Request-ID (trimmed to 64 characters) or
       generates an 8-character one; exposes it through a ContextVar for
       loggers and exception handlers, and echoes it in the response header.
When:  Outermost application middleware, so every log line of a request
       carries the same ID.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
MAX_CLIENT_ID_LENGTH = 64

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns `request.state.request_id` and the `X-Request-ID` response header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        supplied = request.headers.get(REQUEST_ID_HEADER, "").strip()
        rid = supplied[:MAX_CLIENT_ID_LENGTH] if supplied else new_request_id()

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
