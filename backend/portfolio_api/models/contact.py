"""
Portfolio API Backend: Contact Message Document
===============================================

What:  Model for the `contacts` collection.
When:  Written once per contact-form submission; never updated or deleted.
"""

from typing import Optional

from pydantic import Field

from portfolio_api.models.document import TimestampedDocument


class ContactMessage(TimestampedDocument):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    subject: Optional[str] = None
    message: str = Field(min_length=1)
