"""
Portfolio API Backend: Blog Request/Response Schemas
====================================================

What:  API contracts for /api/blog.
"""

from typing import Optional

from pydantic import BaseModel, Field

from portfolio_api.models.blog import BlogPost
from portfolio_api.schemas.common import DocumentIdMixin


class BlogPostUpdate(BaseModel):
    """
    Partial update of a blog post.

    When `excerpt` is not supplied, BlogService derives a fresh one from
    the new content, or from the stored content when `content` is absent.
    """

    title: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = Field(default=None, min_length=1)
    excerpt: Optional[str] = None
    image: Optional[str] = None


class BlogPostResponse(DocumentIdMixin, BlogPost):
    """Stored blog post plus its `_id`."""
