"""
Portfolio API Backend: Portfolio Request/Response Schemas
=========================================================

What:  API contracts for /api/portfolio.
How:   Creation uses the stored `PortfolioItem` model directly (built from
       form fields by the route). Updates use `PortfolioItemUpdate`, where
       every field is optional and only supplied fields are written.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from portfolio_api.models.portfolio import PortfolioItem, PortfolioType
from portfolio_api.schemas.common import DocumentIdMixin


class PortfolioItemUpdate(BaseModel):
    """Partial update; `None` means "leave unchanged"."""

    model_config = ConfigDict(use_enum_values=True)

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    type: Optional[PortfolioType] = None
    link: Optional[str] = None
    image: Optional[str] = None


class PortfolioItemResponse(DocumentIdMixin, PortfolioItem):
    """Stored portfolio item plus its `_id`."""
