"""
Portfolio API Backend: Portfolio Item Document
==============================================

What:  Model for the `portfolios` collection.
Who:   Built by the portfolio routes from form data; stored by PortfolioService.

Lifecycle:
    1. Created via POST /api/portfolio (image optional)
    2. Updated in place via PUT /api/portfolio/{id}
    3. Deleted permanently via DELETE /api/portfolio/{id}
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from portfolio_api.models.document import TimestampedDocument


class PortfolioType(str, Enum):
    """Kind of portfolio entry; the only two values the collection accepts."""

    TEXT = "text"
    PHOTO = "photo"


class PortfolioItem(TimestampedDocument):
    title: str = Field(min_length=1, description="Entry title")
    description: str = Field(min_length=1, description="Entry body text")
    type: PortfolioType = Field(description="Entry kind: text or photo")
    image: Optional[str] = Field(
        default=None,
        description="URL path of the uploaded image (e.g. /uploads/1700000000000-cover.jpg)",
    )
    link: Optional[str] = Field(default=None, description="External link")
