"""
Portfolio API Backend: Contact Route Handlers
=============================================

What:  Contact-form submission (POST) and inbox listing (GET) under /api/contact.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from portfolio_api.schemas.common import ErrorResponse, MessageResponse
from portfolio_api.schemas.contact import ContactMessageCreate, ContactMessageResponse
from portfolio_api.services.contact_service import ContactService, get_contact_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contact", tags=["Contact"])


@router.post(
    "",
    status_code=201,
    response_model=MessageResponse,
    responses={400: {"description": "Missing name, email or message", "model": ErrorResponse}},
    summary="Submit a contact message",
)
async def submit_contact_message(
    payload: ContactMessageCreate,
    service: ContactService = Depends(get_contact_service),
) -> MessageResponse:
    stored = await service.create_message(payload)
    logger.info("Contact message %s received", stored.id)
    return MessageResponse(message="Message sent successfully")


@router.get(
    "",
    response_model=List[ContactMessageResponse],
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="List contact messages, newest first",
)
async def list_contact_messages(
    service: ContactService = Depends(get_contact_service),
) -> List[ContactMessageResponse]:
    return await service.list_messages()
