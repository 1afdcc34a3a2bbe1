"""
Portfolio API Backend: Infrastructure Tests
===========================================

What:  Tests for configuration parsing, the Database wrapper, error
       formatting and the production client fallback.
How:   The MongoDB client class is patched out; the client build is a
       temporary directory.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import ServerSelectionTimeoutError

from portfolio_api.config import Settings
from portfolio_api.database import SETTINGS_COLLECTION, Database
from portfolio_api.exceptions import format_validation_errors
from portfolio_api.routes.client import build_client_router


class TestSettings:

    def test_defaults(self):
        config = Settings(_env_file=None)
        assert config.backend_port == 5000
        assert "http://localhost:3000" in config.cors_origins_list
        assert config.is_production is False

    def test_upload_prefix_is_normalized(self):
        assert Settings(_env_file=None, upload_url_prefix="media/").upload_url_prefix == "/media"

    def test_cors_origins_are_split_and_trimmed(self):
        config = Settings(_env_file=None, cors_origins="https://a.example, https://b.example ,")
        assert config.cors_origins_list == ["https://a.example", "https://b.example"]

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_production_flag(self):
        assert Settings(_env_file=None, environment="Production").is_production is True


class TestDatabase:

    def make_client(self):
        client = MagicMock()
        db = MagicMock()
        client.__getitem__.return_value = db
        db.__getitem__.return_value.create_index = AsyncMock()
        client.close = AsyncMock()
        client.admin.command = AsyncMock(return_value={"ok": 1})
        return client, db

    @pytest.mark.asyncio
    async def test_connect_creates_unique_settings_index(self):
        client, db = self.make_client()
        with patch("portfolio_api.database.AsyncMongoClient", return_value=client) as client_cls:
            database = Database(url="mongodb://db:27017", name="site", timeout_ms=1000)
            await database.connect()

        client_cls.assert_called_once_with(
            "mongodb://db:27017", tz_aware=True, serverSelectionTimeoutMS=1000
        )
        client.__getitem__.assert_called_once_with("site")
        db.__getitem__.assert_any_call(SETTINGS_COLLECTION)
        db.__getitem__.return_value.create_index.assert_awaited_once_with(
            [("key", 1)], unique=True
        )

    @pytest.mark.asyncio
    async def test_index_failure_does_not_block_startup(self):
        client, db = self.make_client()
        db.__getitem__.return_value.create_index.side_effect = ServerSelectionTimeoutError("down")
        with patch("portfolio_api.database.AsyncMongoClient", return_value=client):
            database = Database()
            await database.connect()

        assert database.collection("portfolios") is db.__getitem__.return_value

    @pytest.mark.asyncio
    async def test_is_connected_reflects_ping(self):
        client, _ = self.make_client()
        with patch("portfolio_api.database.AsyncMongoClient", return_value=client):
            database = Database()
            await database.connect()

        assert await database.is_connected() is True
        client.admin.command.side_effect = ServerSelectionTimeoutError("down")
        assert await database.is_connected() is False

    @pytest.mark.asyncio
    async def test_unconnected_database(self):
        database = Database()

        assert await database.is_connected() is False
        with pytest.raises(RuntimeError):
            database.collection("portfolios")
        await database.close()

    @pytest.mark.asyncio
    async def test_close_releases_client(self):
        client, _ = self.make_client()
        with patch("portfolio_api.database.AsyncMongoClient", return_value=client):
            database = Database()
            await database.connect()
        await database.close()

        client.close.assert_awaited_once()
        assert await database.is_connected() is False


class TestValidationMessages:

    def test_location_prefix_is_dropped(self):
        errors = [
            {"loc": ("body", "title"), "msg": "Field required"},
            {"loc": ("body", "type"), "msg": "Input should be 'text' or 'photo'"},
        ]
        assert format_validation_errors(errors) == (
            "title: Field required; type: Input should be 'text' or 'photo'"
        )

    def test_error_without_location(self):
        assert format_validation_errors([{"loc": (), "msg": "Invalid JSON"}]) == "Invalid JSON"


class TestClientFallback:

    @pytest.fixture
    def client_app(self, tmp_path):
        build = tmp_path / "build"
        (build / "static").mkdir(parents=True)
        (build / "index.html").write_text("<html>app</html>")
        (build / "static" / "main.js").write_text("console.log('hi')")
        (tmp_path / "secret.txt").write_text("outside")

        app = FastAPI()

        @app.get("/api/ping")
        async def ping():
            return {"pong": True}

        app.include_router(build_client_router(str(build)))
        return app

    @pytest.mark.asyncio
    async def test_existing_file_and_index_fallback(self, client_app):
        transport = ASGITransport(app=client_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            asset = await client.get("/static/main.js")
            deep_link = await client.get("/blog/some-post")
            api = await client.get("/api/ping")

        assert asset.text == "console.log('hi')"
        assert deep_link.text == "<html>app</html>"
        assert api.json() == {"pong": True}

    @pytest.mark.asyncio
    async def test_paths_outside_build_get_index(self, client_app):
        transport = ASGITransport(app=client_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/..%2Fsecret.txt")

        assert response.text == "<html>app</html>"
