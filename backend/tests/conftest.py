"""
Portfolio API Backend: Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.
Who:   Used by all test files in the tests/ directory.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_collections: One mocked MongoDB collection per collection name
    ├── mock_database: Database stand-in handing out mock_collections
    ├── upload_dir: Temporary directory for upload service unit tests
    ├── served_upload_dir: Directory the app serves under /uploads
    ├── sample_image_bytes: Fake image content for upload tests
    └── test_client: HTTPX AsyncClient wired to the mocks above
"""

import os
import tempfile

# Settings are read at import time: override them BEFORE any app imports
os.environ["MONGODB_URL"] = "mongodb://127.0.0.1:27017"
os.environ["MONGODB_DATABASE"] = "portfolio_test"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="portfolio_test_")
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from portfolio_api.database import (
    BLOG_COLLECTION,
    CONTACT_COLLECTION,
    PORTFOLIO_COLLECTION,
    SETTINGS_COLLECTION,
    Database,
    get_database,
)
from portfolio_api.services.upload_service import UploadService, get_upload_service, upload_service


def make_collection() -> MagicMock:
    """
    A MagicMock shaped like pymongo's AsyncCollection.

    `find()` returns a cursor whose `sort()` returns the same cursor, so both
    `find().to_list()` and `find().sort(...).to_list()` resolve through
    `collection.find.return_value.to_list`.
    """
    collection = MagicMock()

    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.to_list = AsyncMock(return_value=[])
    collection.find.return_value = cursor

    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=ObjectId()))
    collection.find_one = AsyncMock(return_value=None)
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    collection.update_one = AsyncMock(return_value=MagicMock(upserted_id=None))
    return collection


@pytest.fixture
def mock_collections():
    return {
        name: make_collection()
        for name in (PORTFOLIO_COLLECTION, BLOG_COLLECTION, CONTACT_COLLECTION, SETTINGS_COLLECTION)
    }


@pytest.fixture
def mock_database(mock_collections):
    """
    Provides a Database whose collections are mocks.

    Usage:
        async def test_list(mock_database, mock_collections):
            mock_collections["portfolios"].find.return_value.to_list.return_value = [...]
            items = await PortfolioService(mock_database).list_items()
    """
    database = MagicMock(spec=Database)
    database.collection.side_effect = mock_collections.__getitem__
    database.is_connected = AsyncMock(return_value=True)
    return database


@pytest.fixture
def upload_dir(tmp_path):
    """A fresh upload directory for each test (pytest cleans it up)."""
    directory = tmp_path / "uploads"
    directory.mkdir()
    return directory


@pytest.fixture
def served_upload_dir():
    """
    The directory mounted at /uploads (UPLOAD_DIR, set above).

    Endpoint tests write here so stored files can be fetched back.
    """
    return upload_service.ensure_directory()


@pytest.fixture
def sample_image_bytes():
    """Minimal JPEG: Start of Image (FFD8) + JFIF marker + End of Image (FFD9)."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def make_document():
    """Factory for stored documents as the driver returns them."""

    def _make(**fields):
        document = {"_id": ObjectId(), "createdAt": datetime.now(timezone.utc)}
        document.update(fields)
        return document

    return _make


@pytest_asyncio.fixture
async def test_client(mock_database, served_upload_dir):
    """
    Provides an async HTTP test client for endpoint testing.

    The lifespan is not run: the Database dependency is overridden with
    `mock_database`; uploads go to the directory the app serves.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/api/health")
            assert response.status_code == 200
    """
    from portfolio_api.main import app

    app.dependency_overrides[get_database] = lambda: mock_database
    app.dependency_overrides[get_upload_service] = lambda: UploadService(upload_dir=str(served_upload_dir))

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
