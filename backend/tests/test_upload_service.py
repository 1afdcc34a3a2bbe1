"""
Portfolio API Backend: Upload Service Unit Tests
================================================

What:  Tests for stored-file naming, collision handling and directory setup.
How:   Uses pytest's tmp_path for isolated file system operations and a
       pinned clock for deterministic names.

What we test:
    ✅ Stored name is `<epoch ms>-<original filename>` and the URL path matches
    ✅ Same filename in the same millisecond never overwrites
    ✅ Only the base name of the client filename is kept
    ✅ Missing upload directory is created on demand
    ✅ Unwritable directory raises FileStorageError
"""

import re

import pytest

from portfolio_api.exceptions import FileStorageError
from portfolio_api.services.upload_service import DEFAULT_UPLOAD_NAME, UploadService

FIXED_MS = 1700000000000


class TestUploadNaming:
    """Tests for the `<timestamp>-<filename>` naming scheme."""

    @pytest.mark.asyncio
    async def test_store_writes_timestamped_file(self, upload_dir, sample_image_bytes):
        service = UploadService(upload_dir=str(upload_dir))

        abs_path, url_path = await service.store("cover.jpg", sample_image_bytes)

        assert re.match(r"^/uploads/\d+-cover\.jpg$", url_path)
        stored = upload_dir.resolve() / url_path.rsplit("/", 1)[1]
        assert stored.read_bytes() == sample_image_bytes
        assert abs_path == str(stored)

    @pytest.mark.asyncio
    async def test_same_millisecond_does_not_overwrite(self, upload_dir, monkeypatch):
        service = UploadService(upload_dir=str(upload_dir))
        monkeypatch.setattr(UploadService, "_timestamp_ms", staticmethod(lambda: FIXED_MS))

        _, first = await service.store("cover.jpg", b"first")
        _, second = await service.store("cover.jpg", b"second")

        assert first == f"/uploads/{FIXED_MS}-cover.jpg"
        assert second == f"/uploads/{FIXED_MS + 1}-cover.jpg"
        assert (upload_dir / f"{FIXED_MS}-cover.jpg").read_bytes() == b"first"
        assert (upload_dir / f"{FIXED_MS + 1}-cover.jpg").read_bytes() == b"second"

    def test_url_prefix_is_configurable(self, upload_dir):
        service = UploadService(upload_dir=str(upload_dir), url_prefix="media/")
        assert service.url_for("1-a.png") == "/media/1-a.png"


class TestCleanFilename:
    """Client filenames are reduced to a base name."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("cover.jpg", "cover.jpg"),
            ("../../etc/passwd", "passwd"),
            ("C:\\photos\\me.png", "me.png"),
            ("", DEFAULT_UPLOAD_NAME),
            (None, DEFAULT_UPLOAD_NAME),
            ("..", DEFAULT_UPLOAD_NAME),
        ],
    )
    def test_clean_filename(self, raw, expected):
        assert UploadService.clean_filename(raw) == expected

    @pytest.mark.asyncio
    async def test_traversal_name_stays_inside_directory(self, upload_dir):
        service = UploadService(upload_dir=str(upload_dir))

        abs_path, _ = await service.store("../../escape.txt", b"x")

        assert abs_path.startswith(str(upload_dir.resolve()))
        assert abs_path.endswith("-escape.txt")


class TestUploadDirectory:
    """Tests for directory creation and write failures."""

    @pytest.mark.asyncio
    async def test_missing_directory_is_created(self, tmp_path):
        target = tmp_path / "nested" / "uploads"
        service = UploadService(upload_dir=str(target))

        await service.store("a.png", b"data")

        assert target.is_dir()
        assert len(list(target.iterdir())) == 1

    def test_ensure_directory_is_idempotent(self, upload_dir):
        service = UploadService(upload_dir=str(upload_dir))
        assert service.ensure_directory() == upload_dir.resolve()
        assert service.ensure_directory() == upload_dir.resolve()

    @pytest.mark.asyncio
    async def test_unwritable_directory_raises(self, tmp_path):
        # A regular file where the directory should be
        blocker = tmp_path / "uploads"
        blocker.write_text("not a directory")
        service = UploadService(upload_dir=str(blocker))

        with pytest.raises(FileStorageError):
            await service.store("a.png", b"data")
