"""
StreamHub Core Settings.

All values can be overridden through ``STREAMHUB_*`` environment variables
or a local ``.env`` file.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8",
        env_prefix="STREAMHUB_", case_sensitive=False,
    )

    # ── App ──────────────────────────────────────────────────────────────
    app_name: str = "StreamHub"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = "/api/v1"
    cors_origins: List[str] = ["*"]

    # ── PostgreSQL ───────────────────────────────────────────────────────
    db_host: str = "postgres"
    db_port: int = 5432
    db_user: str = "streamhub"
    db_password: str = "streamhub_secret"
    db_name: str = "streamhub"
    db_echo: bool = False
    # Full URL override (tests point this at sqlite+aiosqlite)
    db_url: Optional[str] = None

    @property
    def database_url(self) -> str:
        if self.db_url:
            return self.db_url
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    # ── Identity ─────────────────────────────────────────────────────────
    # Set by the upstream gateway after token verification.
    auth_header: str = "X-User-Id"

    # ── Pagination ───────────────────────────────────────────────────────
    default_page_size: int = 10
    max_page_size: int = 100

    # ── MinIO / S3 ───────────────────────────────────────────────────────
    minio_endpoint: str = "minio:9000"
    minio_access_key: str = "streamhub_minio"
    minio_secret_key: str = "streamhub_minio_secret"
    minio_bucket: str = "streamhub-media"
    minio_secure: bool = False
    media_public_url: Optional[str] = None

    @property
    def media_base_url(self) -> str:
        if self.media_public_url:
            return self.media_public_url.rstrip("/")
        scheme = "https" if self.minio_secure else "http"
        return f"{scheme}://{self.minio_endpoint}/{self.minio_bucket}"

    # ── Media Probing ────────────────────────────────────────────────────
    ffprobe_timeout_seconds: int = 30
    temp_dir: str = "/tmp/streamhub"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
