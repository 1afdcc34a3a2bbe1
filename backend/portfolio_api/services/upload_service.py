"""
Portfolio API Backend: Upload Storage Service
=============================================

What:  Stores the single image a create/update request may carry and
       returns the URL path recorded in the owning document's `image` field.
How:   Writes bytes asynchronously into the flat upload directory under the
       name `<epoch milliseconds>-<original filename>`.
Who:   Called by the portfolio and blog routes.
When:  Before the document write; a failed write leaves the file in place.

Naming:
    1700000000000-cover.jpg   → served at /uploads/1700000000000-cover.jpg

    Files are opened in exclusive-create mode. When two uploads of the same
    filename land in the same millisecond, the second one bumps the
    timestamp until a free name is found, so nothing is overwritten and the
    `<timestamp>-<filename>` shape is preserved.

    Only the base name of the client filename is kept, so a name such as
    "../../etc/passwd" is stored as "<ts>-passwd" inside the upload directory.
"""

import logging
import time
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Optional, Tuple

import aiofiles

from portfolio_api.config import settings
from portfolio_api.exceptions import FileStorageError

logger = logging.getLogger(__name__)

# Filename used when the client sends none
DEFAULT_UPLOAD_NAME = "upload"

# Upper bound on timestamp bumps before giving up on a free name
MAX_NAME_ATTEMPTS = 1000


class UploadService:
    """
    Manages the upload directory.

    Directory Structure:
        uploads/
        ├── 1700000000000-cover.jpg
        └── 1700000004521-portrait.png
    """

    def __init__(self, upload_dir: Optional[str] = None, url_prefix: Optional[str] = None):
        """
        Args:
            upload_dir: Override the upload directory (used in tests).
            url_prefix: Override the URL prefix stored in documents.
        """
        self.upload_dir = Path(upload_dir or settings.upload_dir).resolve()
        self.url_prefix = "/" + (url_prefix or settings.upload_url_prefix).strip("/")

    def ensure_directory(self) -> Path:
        """Create the upload directory if it is missing. Idempotent."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        return self.upload_dir

    @staticmethod
    def clean_filename(filename: Optional[str]) -> str:
        """
        Reduce a client-supplied filename to its base name.

        Both "/" and "\\" separators are stripped.
        """
        if not filename:
            return DEFAULT_UPLOAD_NAME
        name = PureWindowsPath(PurePosixPath(filename).name).name.strip()
        if name in ("", ".", ".."):
            return DEFAULT_UPLOAD_NAME
        return name

    @staticmethod
    def _timestamp_ms() -> int:
        return int(time.time() * 1000)

    def url_for(self, stored_name: str) -> str:
        """URL path under which a stored file is served."""
        return f"{self.url_prefix}/{stored_name}"

    async def store(self, filename: Optional[str], content: bytes) -> Tuple[str, str]:
        """
        Write an uploaded file to disk.

        Returns:
            Tuple of (absolute_path, url_path), e.g.
            ("/srv/uploads/1700000000000-cover.jpg", "/uploads/1700000000000-cover.jpg")

        Raises:
            FileStorageError if the directory cannot be created or written.
        """
        name = self.clean_filename(filename)
        timestamp = self._timestamp_ms()

        try:
            self.ensure_directory()
            for _ in range(MAX_NAME_ATTEMPTS):
                stored_name = f"{timestamp}-{name}"
                target = self.upload_dir / stored_name
                try:
                    # 'xb': fails instead of truncating an existing upload
                    async with aiofiles.open(target, "xb") as f:
                        await f.write(content)
                except FileExistsError:
                    timestamp += 1
                    continue

                logger.info("Upload stored: %s (%d bytes)", stored_name, len(content))
                return str(target), self.url_for(stored_name)

        except OSError as e:
            logger.error("Failed to store upload %s: %s", name, str(e))
            raise FileStorageError(
                message=f"Failed to save uploaded file: {e}",
                context={"filename": name, "os_error": str(e)},
            )

        raise FileStorageError(
            message="Could not find a free name for the uploaded file",
            context={"filename": name},
        )


# ── Singleton Instance ────────────────────────────────────────────────────
upload_service = UploadService()


def get_upload_service() -> UploadService:
    """FastAPI dependency; overridden in tests to point at a temp directory."""
    return upload_service
