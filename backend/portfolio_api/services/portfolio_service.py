"""
Portfolio API Backend: Portfolio Service
========================================

What:  Portfolio item operations on the `portfolios` collection.
Who:   Called by the /api/portfolio route handlers.
"""

from typing import List, Optional

from fastapi import Depends

from portfolio_api.database import PORTFOLIO_COLLECTION, Database, get_database
from portfolio_api.models.portfolio import PortfolioItem
from portfolio_api.schemas.portfolio import PortfolioItemResponse, PortfolioItemUpdate
from portfolio_api.services.document_service import DocumentService

# Query value that disables the type filter
ALL_TYPES = "all"


class PortfolioService(DocumentService):
    collection_name = PORTFOLIO_COLLECTION
    response_model = PortfolioItemResponse
    resource = "portfolio item"

    async def list_items(self, item_type: Optional[str] = None) -> List[PortfolioItemResponse]:
        """
        List portfolio items, newest first.

        Args:
            item_type: "text" or "photo" to filter; None, "" or "all" lists everything.
                       Any other value simply matches nothing.
        """
        query = {"type": item_type} if item_type and item_type != ALL_TYPES else {}
        return await self.list_documents(query)

    async def get_item(self, item_id: str) -> Optional[PortfolioItemResponse]:
        return await self.get(item_id)

    async def create_item(self, item: PortfolioItem) -> PortfolioItemResponse:
        return await self.insert(item)

    async def update_item(
        self, item_id: str, changes: PortfolioItemUpdate
    ) -> Optional[PortfolioItemResponse]:
        """Apply the supplied fields; unsupplied fields and `createdAt` stay as stored."""
        return await self.update_fields(item_id, changes.model_dump(exclude_none=True))

    async def delete_item(self, item_id: str) -> None:
        await self.delete(item_id)


def get_portfolio_service(db: Database = Depends(get_database)) -> PortfolioService:
    """FastAPI dependency building the service around the app's Database."""
    return PortfolioService(db)
