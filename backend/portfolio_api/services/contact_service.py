"""
Portfolio API Backend: Contact Service
======================================

What:  Stores and lists contact-form submissions (`contacts` collection).
Who:   Called by the /api/contact route handlers.

Messages are write-once: there is no update or delete operation.
"""

from typing import List

from fastapi import Depends

from portfolio_api.database import CONTACT_COLLECTION, Database, get_database
from portfolio_api.models.contact import ContactMessage
from portfolio_api.schemas.contact import ContactMessageCreate, ContactMessageResponse
from portfolio_api.services.document_service import DocumentService


class ContactService(DocumentService):
    collection_name = CONTACT_COLLECTION
    response_model = ContactMessageResponse
    resource = "contact message"

    async def list_messages(self) -> List[ContactMessageResponse]:
        return await self.list_documents()

    async def create_message(self, payload: ContactMessageCreate) -> ContactMessageResponse:
        """Stamp `createdAt` and store the submission."""
        message = ContactMessage(**payload.model_dump())
        return await self.insert(message)


def get_contact_service(db: Database = Depends(get_database)) -> ContactService:
    return ContactService(db)
