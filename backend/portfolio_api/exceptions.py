"""
Portfolio API Backend: Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for the different failure kinds.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by services; caught by global handlers.
When:  During request processing when a database or disk operation fails.

Exception Hierarchy:
    PortfolioError (base)
    ├── ValidationError    → 400 Bad Request (bad input, or any failed write)
    ├── DatabaseError      → 500 Internal Server Error (failed read/list)
    └── FileStorageError   → 500 Internal Server Error

There is no NotFoundError: a missing id yields `null` on reads
and updates and a normal confirmation on deletes.
"""

from typing import Any, Dict, Optional, Sequence

from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from portfolio_api.middleware.request_id import request_id_var


class PortfolioError(Exception):
    """
    Base exception for all Portfolio API errors.

    Attributes:
        message:  Error description returned verbatim in the API response
        context:  Additional debug info (logged, never returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PortfolioError):
    """
    Raised when a document fails validation or a write operation fails.

    When:    Missing required field, value outside an enum, malformed id,
             or the database rejecting an insert/update/delete/upsert.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "type: Input should be 'text' or 'photo'",
            "kind": "validation_error",
            "details": {"field": "type"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DatabaseError(PortfolioError):
    """
    Raised when a read or list query fails.

    When:    Connection lost mid-query, server selection timeout, malformed id
             on a single-document fetch.
    HTTP:    500 Internal Server Error

    The raw driver message is returned to the client, matching the
    behaviour the frontend already relies on.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class FileStorageError(PortfolioError):
    """
    Raised when an uploaded file cannot be written to the upload directory.

    When:    Disk full, permission denied, directory not writable.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


def format_validation_errors(errors: Sequence[Dict[str, Any]]) -> str:
    """
    Render pydantic/FastAPI error dicts as one readable message.

    Example:
        [{"loc": ("body", "title"), "msg": "Field required"}]
        → "title: Field required"
    """
    parts = []
    for error in errors:
        loc = [str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path", "form")]
        field = ".".join(loc)
        parts.append(f"{field}: {error.get('msg', 'invalid value')}" if field else error.get("msg", ""))
    return "; ".join(parts) or "Validation failed"


def validation_error_from(exc: PydanticValidationError) -> ValidationError:
    """Convert a pydantic ValidationError raised while building a document."""
    errors = exc.errors()
    first_field = None
    if errors and errors[0].get("loc"):
        first_field = str(errors[0]["loc"][-1])
    return ValidationError(
        message=format_validation_errors(errors),
        field=first_field,
        context={"model": exc.title},
    )


def error_response(
    status_code: int,
    message: str,
    kind: str,
    field: Optional[str] = None,
) -> JSONResponse:
    """
    Build the JSON error body shared by every handler.

    Shape: {"error": <raw message>, "kind": ..., "request_id": ...}
    plus {"details": {"field": ...}} when a single field is to blame.
    Exception context is never included.
    """
    body: Dict[str, Any] = {
        "error": message,
        "kind": kind,
        "request_id": request_id_var.get(""),
    }
    if field:
        body["details"] = {"field": field}
    return JSONResponse(status_code=status_code, content=body)
