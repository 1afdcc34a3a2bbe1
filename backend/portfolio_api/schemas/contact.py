"""
Portfolio API Backend: Contact Request/Response Schemas
=======================================================

What:  API contracts for /api/contact.
"""

from typing import Optional

from pydantic import BaseModel, Field

from portfolio_api.models.contact import ContactMessage
from portfolio_api.schemas.common import DocumentIdMixin


class ContactMessageCreate(BaseModel):
    """JSON body of POST /api/contact. `createdAt` is assigned server-side."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    subject: Optional[str] = None
    message: str = Field(min_length=1)


class ContactMessageResponse(DocumentIdMixin, ContactMessage):
    """Stored contact message plus its `_id`."""
