"""
Portfolio API Backend: Blog Post Document
=========================================

What:  Model for the `blogs` collection.
Who:   Built by the blog routes from form data; stored by BlogService,
       which fills `excerpt` from `content` when it is not supplied.
"""

from typing import Optional

from pydantic import Field

from portfolio_api.models.document import TimestampedDocument


class BlogPost(TimestampedDocument):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1, description="Post body; may contain HTML")
    excerpt: Optional[str] = Field(
        default=None,
        description="Plain-text summary; derived from content when omitted",
    )
    image: Optional[str] = None
