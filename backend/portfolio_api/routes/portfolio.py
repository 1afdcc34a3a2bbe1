"""
Portfolio API Backend: Portfolio Route Handlers
===============================================

What:  CRUD endpoints for portfolio items under /api/portfolio.
How:   Extracts query/form/file data, delegates to PortfolioService, returns JSON.
Who:   Called by the public site (list/detail) and the admin UI (writes).

Request Flow (POST/PUT):
    1. Client sends multipart/form-data (text fields + optional 'image' file),
       a urlencoded form, or a JSON object with the same fields
    2. The file, if any, is stored first and its URL path becomes `image`
    3. Fields are validated into a typed model (400 on failure)
    4. PortfolioService writes the document
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from portfolio_api.models.portfolio import PortfolioItem
from portfolio_api.routes.forms import build_model, collect_write_fields, write_body_openapi
from portfolio_api.schemas.common import ErrorResponse, MessageResponse
from portfolio_api.schemas.portfolio import PortfolioItemResponse, PortfolioItemUpdate
from portfolio_api.services.portfolio_service import PortfolioService, get_portfolio_service
from portfolio_api.services.upload_service import UploadService, get_upload_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api/portfolio", tags=["Portfolio"])

# Fields a create/update request may set
WRITE_FIELDS = ("title", "description", "type", "link", "image")


@router.get(
    "",
    response_model=List[PortfolioItemResponse],
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="List portfolio items",
    description="Returns every portfolio item, newest first, optionally filtered by type.",
)
async def list_portfolio_items(
    type: Optional[str] = Query(
        default=None,
        description="'text' or 'photo' to filter; 'all' or omitted for every item",
    ),
    service: PortfolioService = Depends(get_portfolio_service),
) -> List[PortfolioItemResponse]:
    return await service.list_items(type)


@router.get(
    "/{item_id}",
    response_model=Optional[PortfolioItemResponse],
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="Get a portfolio item by ID",
    description="Returns the item, or null when no item has this ID.",
)
async def get_portfolio_item(
    item_id: str,
    service: PortfolioService = Depends(get_portfolio_service),
) -> Optional[PortfolioItemResponse]:
    return await service.get_item(item_id)


@router.post(
    "",
    status_code=201,
    response_model=PortfolioItemResponse,
    responses={400: {"description": "Validation failed", "model": ErrorResponse}},
    summary="Create a portfolio item",
    openapi_extra=write_body_openapi(WRITE_FIELDS),
)
async def create_portfolio_item(
    request: Request,
    service: PortfolioService = Depends(get_portfolio_service),
    uploads: UploadService = Depends(get_upload_service),
) -> PortfolioItemResponse:
    """
    Create a portfolio item from form data or JSON.

    Required fields are checked when the document is built, so a missing
    title or an unknown type answers 400 (after any uploaded file is saved).
    """
    fields = await collect_write_fields(request, uploads, WRITE_FIELDS)
    item = build_model(PortfolioItem, **fields)
    return await service.create_item(item)


@router.put(
    "/{item_id}",
    response_model=Optional[PortfolioItemResponse],
    responses={400: {"description": "Validation or write failed", "model": ErrorResponse}},
    summary="Update a portfolio item",
    description="Overwrites the supplied fields; a new image file replaces the stored image path.",
    openapi_extra=write_body_openapi(WRITE_FIELDS),
)
async def update_portfolio_item(
    item_id: str,
    request: Request,
    service: PortfolioService = Depends(get_portfolio_service),
    uploads: UploadService = Depends(get_upload_service),
) -> Optional[PortfolioItemResponse]:
    fields = await collect_write_fields(request, uploads, WRITE_FIELDS)
    changes = build_model(PortfolioItemUpdate, **fields)
    return await service.update_item(item_id, changes)


@router.delete(
    "/{item_id}",
    response_model=MessageResponse,
    responses={400: {"description": "Delete failed", "model": ErrorResponse}},
    summary="Delete a portfolio item",
)
async def delete_portfolio_item(
    item_id: str,
    service: PortfolioService = Depends(get_portfolio_service),
) -> MessageResponse:
    """Deleting an ID that does not exist is reported as success."""
    await service.delete_item(item_id)
    return MessageResponse(message="Portfolio item deleted")
