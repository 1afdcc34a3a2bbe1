"""
Portfolio API Backend: Blog Route Handlers
==========================================

What:  CRUD endpoints for blog posts under /api/blog.
How:   Same body handling as /api/portfolio (form data or JSON, optional
       image file); BlogService fills in the excerpt when the client leaves it out.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Request

from portfolio_api.models.blog import BlogPost
from portfolio_api.routes.forms import build_model, collect_write_fields, write_body_openapi
from portfolio_api.schemas.blog import BlogPostResponse, BlogPostUpdate
from portfolio_api.schemas.common import ErrorResponse, MessageResponse
from portfolio_api.services.blog_service import BlogService, get_blog_service
from portfolio_api.services.upload_service import UploadService, get_upload_service

router = APIRouter(prefix="/api/blog", tags=["Blog"])

WRITE_FIELDS = ("title", "content", "excerpt", "image")


@router.get(
    "",
    response_model=List[BlogPostResponse],
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="List blog posts, newest first",
)
async def list_blog_posts(
    service: BlogService = Depends(get_blog_service),
) -> List[BlogPostResponse]:
    return await service.list_posts()


@router.get(
    "/{post_id}",
    response_model=Optional[BlogPostResponse],
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="Get a blog post by ID (null when absent)",
)
async def get_blog_post(
    post_id: str,
    service: BlogService = Depends(get_blog_service),
) -> Optional[BlogPostResponse]:
    return await service.get_post(post_id)


@router.post(
    "",
    status_code=201,
    response_model=BlogPostResponse,
    responses={400: {"description": "Validation failed", "model": ErrorResponse}},
    summary="Create a blog post",
    openapi_extra=write_body_openapi(WRITE_FIELDS),
)
async def create_blog_post(
    request: Request,
    service: BlogService = Depends(get_blog_service),
    uploads: UploadService = Depends(get_upload_service),
) -> BlogPostResponse:
    fields = await collect_write_fields(request, uploads, WRITE_FIELDS)
    post = build_model(BlogPost, **fields)
    return await service.create_post(post)


@router.put(
    "/{post_id}",
    response_model=Optional[BlogPostResponse],
    responses={400: {"description": "Validation or write failed", "model": ErrorResponse}},
    summary="Update a blog post",
    openapi_extra=write_body_openapi(WRITE_FIELDS),
)
async def update_blog_post(
    post_id: str,
    request: Request,
    service: BlogService = Depends(get_blog_service),
    uploads: UploadService = Depends(get_upload_service),
) -> Optional[BlogPostResponse]:
    fields = await collect_write_fields(request, uploads, WRITE_FIELDS)
    changes = build_model(BlogPostUpdate, **fields)
    return await service.update_post(post_id, changes)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    responses={400: {"description": "Delete failed", "model": ErrorResponse}},
    summary="Delete a blog post",
)
async def delete_blog_post(
    post_id: str,
    service: BlogService = Depends(get_blog_service),
) -> MessageResponse:
    await service.delete_post(post_id)
    return MessageResponse(message="Blog post deleted")
