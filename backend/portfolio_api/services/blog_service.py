"""
Portfolio API Backend: Blog Service
===================================

What:  Blog post operations on the `blogs` collection, plus excerpt derivation.
Who:   Called by the /api/blog route handlers.

Excerpt Derivation:
    When a post is created or updated without an explicit excerpt, one is
    built from the content:

        "<p>Hello <b>world</b></p>"
          → strip tags      "Hello world"
          → trim            "Hello world"
          → first 150 chars "Hello world"
          → append "..."    "Hello world..."

    The ellipsis is appended even when nothing was cut off.
"""

import logging
import re
from typing import List, Optional

from bson import ObjectId
from fastapi import Depends

from portfolio_api.database import BLOG_COLLECTION, Database, get_database
from portfolio_api.exceptions import ValidationError
from portfolio_api.models.blog import BlogPost
from portfolio_api.schemas.blog import BlogPostResponse, BlogPostUpdate
from portfolio_api.services.document_service import DocumentService

logger = logging.getLogger(__name__)

# "<", any run of non-">" characters, ">"
MARKUP_TAG_PATTERN = re.compile(r"<[^>]*>")
EXCERPT_LENGTH = 150
EXCERPT_SUFFIX = "..."


def strip_markup(html: str) -> str:
    """Remove every tag and trim surrounding whitespace."""
    return MARKUP_TAG_PATTERN.sub("", html).strip()


def derive_excerpt(content: str) -> str:
    """Plain-text excerpt of `content`: first 150 characters plus "..."."""
    return strip_markup(content)[:EXCERPT_LENGTH] + EXCERPT_SUFFIX


class BlogService(DocumentService):
    collection_name = BLOG_COLLECTION
    response_model = BlogPostResponse
    resource = "blog post"

    async def list_posts(self) -> List[BlogPostResponse]:
        return await self.list_documents()

    async def get_post(self, post_id: str) -> Optional[BlogPostResponse]:
        return await self.get(post_id)

    async def create_post(self, post: BlogPost) -> BlogPostResponse:
        """Insert a post, deriving its excerpt when none (or an empty one) was given."""
        if not post.excerpt:
            post.excerpt = derive_excerpt(post.content)
        return await self.insert(post)

    async def update_post(self, post_id: str, changes: BlogPostUpdate) -> Optional[BlogPostResponse]:
        """
        Apply the supplied fields and refresh the excerpt.

        Unless an explicit excerpt is supplied, the excerpt is re-derived on
        every update: from the new content when it is part of the update,
        otherwise from the stored content. Returns None when the post does
        not exist.
        """
        fields = changes.model_dump(exclude_none=True)
        if not fields.get("excerpt"):
            fields.pop("excerpt", None)
            content = changes.content
            if content is None:
                content = await self.stored_content(post_id)
                if content is None:
                    return None
            fields["excerpt"] = derive_excerpt(content)
            logger.debug("Derived excerpt for blog post %s", post_id)
        return await self.update_fields(post_id, fields)

    async def stored_content(self, post_id: str) -> Optional[str]:
        """Current `content` of a post, or None when the post does not exist."""
        try:
            document = await self.collection.find_one({"_id": ObjectId(post_id)}, {"content": 1})
        except Exception as e:
            logger.error("Error reading blog post %s for update: %s", post_id, str(e))
            raise ValidationError(
                message=str(e),
                context={"collection": self.collection_name, "id": post_id},
            )
        return document.get("content") if document else None

    async def delete_post(self, post_id: str) -> None:
        await self.delete(post_id)


def get_blog_service(db: Database = Depends(get_database)) -> BlogService:
    """FastAPI dependency building the service around the app's Database."""
    return BlogService(db)
