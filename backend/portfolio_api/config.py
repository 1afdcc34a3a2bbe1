"""
Portfolio API Backend: Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List

# Origins the public site and local development servers are served from
DEFAULT_CORS_ORIGINS = ",".join(
    [
        "https://shannahjongstra.be",
        "https://www.shannahjongstra.be",
        "http://localhost:3000",
        "http://localhost:3001",
    ]
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every setting has a default that works against a local MongoDB instance.
    Attributes are grouped by concern for readability.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Format: mongodb://[user:password@]host:port
    mongodb_url: str = Field(
        default="mongodb://127.0.0.1:27017",
        description="MongoDB connection URL",
    )
    mongodb_database: str = Field(default="shannah_portfolio")

    # Bounds how long a request (or the health check) waits for a reachable server
    mongodb_timeout_ms: int = Field(default=5000, ge=100, le=120_000)

    # ── Uploads ───────────────────────────────────────────────────────────
    # Directory uploaded images are written to, relative to the backend CWD
    upload_dir: str = Field(default="uploads")

    # URL prefix the upload directory is served under; stored in `image` fields
    upload_url_prefix: str = Field(default="/uploads")

    @field_validator("upload_url_prefix")
    @classmethod
    def normalize_upload_prefix(cls, v: str) -> str:
        """Forces a single leading slash and no trailing slash."""
        return "/" + v.strip("/")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (parsed by the property below)
    cors_origins: str = Field(default=DEFAULT_CORS_ORIGINS)

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Client Application ────────────────────────────────────────────────
    # In production the pre-built client is served from client_build_dir and
    # every unmatched GET falls back to its index.html
    environment: str = Field(default="development")
    client_build_dir: str = Field(default="build")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=5000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MONGODB_URL and mongodb_url both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
