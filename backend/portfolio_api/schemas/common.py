"""
Portfolio API Backend: Shared Response Schemas
==============================================

What:  Response models shared across resources (ids, messages, errors, health).
How:   FastAPI serialises these by alias, so clients see `_id` and
       `createdAt` exactly as stored.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class DocumentIdMixin(BaseModel):
    """
    Adds the MongoDB `_id` to a response model.

    ObjectIds coming straight from the driver are rendered as their
    24-character hex string.
    """

    id: str = Field(alias="_id", description="Document identifier (ObjectId hex)")

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, v):
        return str(v)


class MessageResponse(BaseModel):
    """Plain confirmation returned by deletes, contact submissions and settings writes."""

    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    What:  Error body returned by every exception handler.

    Example:
        {
            "error": "type: Input should be 'text' or 'photo'",
            "kind": "validation_error",
            "details": {"field": "type"},
            "request_id": "1a2b3c4d"
        }

    `error` always carries the raw message; `kind` is the coarse category.
    """

    error: str = Field(description="Raw error message")
    kind: str = Field(description="Error kind: validation_error, server_error, ...")
    details: Optional[dict] = Field(default=None, description="Offending field, for validation errors")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Liveness payload for GET /api/health.

    Always returned with HTTP 200; `database` reflects connectivity.
    """

    status: str = Field(default="OK", description="Overall status literal")
    timestamp: datetime = Field(description="Current server time (UTC ISO 8601)")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime: float = Field(description="Seconds since the process started")
    message: str = Field(description="Static service description")


class RootResponse(BaseModel):
    """Service banner for GET /."""

    message: str
    status: str
    endpoints: List[str]
