"""
Portfolio API Backend: Stored Document Base Models
==================================================

What:  Pydantic base classes for documents persisted in MongoDB.
How:   Each concrete model corresponds to one collection. Validating a
       model is the schema check a write has to pass before it reaches
       the database; `to_document()` produces the dict that is inserted.
Who:   Subclassed by the per-collection models in this package.

Field naming:
    Python attributes are snake_case; the stored/serialised keys use the
    camelCase names the existing frontend and data already use
    (`created_at` ↔ `createdAt`).
"""

from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class StoredDocument(BaseModel):
    """Base for every persisted document."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    def to_document(self) -> Dict[str, Any]:
        """Dict ready for `insert_one`, using the stored key names."""
        return self.model_dump(by_alias=True)


class TimestampedDocument(StoredDocument):
    """
    Document carrying a creation timestamp.

    `createdAt` is assigned once when the model is built for an insert.
    Update payloads never include it, so it is never rewritten.
    """

    created_at: datetime = Field(
        default_factory=utc_now,
        alias="createdAt",
        description="When the document was created (UTC)",
    )
