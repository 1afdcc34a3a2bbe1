"""
Portfolio API Backend: Database Connection Management
=====================================================

What:  Owns the async MongoDB client and hands out collections.
How:   A `Database` object is created and connected in the application
       lifespan, stored on `app.state`, and injected into services through
       the `get_database` FastAPI dependency.
Who:   Used by services via dependency injection; by the health route.
When:  Connected once at startup; closed at shutdown.

Collections:
    portfolios  → PortfolioItem documents
    blogs       → BlogPost documents
    contacts    → ContactMessage documents
    settings    → SettingEntry documents (unique index on `key`)
"""

import logging
from typing import Optional

from fastapi import Request
from pymongo import ASCENDING, AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from portfolio_api.config import settings

logger = logging.getLogger(__name__)


# ── Collection Names ──────────────────────────────────────────────────────
PORTFOLIO_COLLECTION = "portfolios"
BLOG_COLLECTION = "blogs"
CONTACT_COLLECTION = "contacts"
SETTINGS_COLLECTION = "settings"


class Database:
    """
    Explicitly owned MongoDB connection.

    Lifecycle:
        1. Database(url, name)  → nothing is opened yet
        2. await connect()      → client created, indexes ensured
        3. collection(name)     → used by services for every request
        4. await close()        → client closed (application shutdown)

    The client is created with `tz_aware=True` so `createdAt` values come
    back as UTC-aware datetimes.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        name: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ):
        self.url = url or settings.mongodb_url
        self.name = name or settings.mongodb_database
        self.timeout_ms = timeout_ms or settings.mongodb_timeout_ms
        self._client: Optional[AsyncMongoClient] = None
        self._db: Optional[AsyncDatabase] = None

    async def connect(self) -> None:
        """
        Create the client and ensure indexes.

        AsyncMongoClient connects lazily, so this never blocks on an
        unreachable server; index creation failures are logged and the
        application starts anyway (the health endpoint reports the state).
        """
        self._client = AsyncMongoClient(
            self.url,
            tz_aware=True,
            serverSelectionTimeoutMS=self.timeout_ms,
        )
        self._db = self._client[self.name]
        logger.info("MongoDB client created for database '%s'", self.name)

        try:
            await self.ensure_indexes()
        except PyMongoError as e:
            logger.error("Could not ensure MongoDB indexes: %s", str(e))

    async def ensure_indexes(self) -> None:
        """Create the unique index backing settings upserts."""
        await self.collection(SETTINGS_COLLECTION).create_index(
            [("key", ASCENDING)], unique=True
        )

    async def close(self) -> None:
        """Close all pooled connections. Safe to call when never connected."""
        if self._client is not None:
            await self._client.close()
            logger.info("MongoDB client closed")
        self._client = None
        self._db = None

    def collection(self, name: str) -> AsyncCollection:
        """Return a collection handle; raises RuntimeError before connect()."""
        if self._db is None:
            raise RuntimeError("Database is not connected")
        return self._db[name]

    async def is_connected(self) -> bool:
        """
        Report whether the server answers a `ping` command.

        Used by GET /api/health. Never raises: any failure (including not
        being connected at all) reports False.
        """
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except Exception as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False


# ── Dependency ────────────────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """
    FastAPI dependency returning the Database owned by the running app.

    Example usage in a route:
        @router.get("/things")
        async def list_things(db: Database = Depends(get_database)):
            ...
    """
    return request.app.state.database
