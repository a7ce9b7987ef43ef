"""
StreamHub Media Storage — S3-compatible object storage (MinIO) for video files
and thumbnails.

Uploads are staged to a temp file, probed with ffprobe for duration (videos
only), then pushed with boto3 from a worker thread.
"""
from __future__ import annotations

import asyncio
import json
import logging
import os
import shutil
import subprocess
import tempfile
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile

from streamhub.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class MediaStorageError(Exception):
    pass


@dataclass
class UploadedMedia:
    url: str
    key: str
    duration: Optional[float] = None


def probe_duration(path: Path, timeout: int = 30) -> float:
    """Container duration in seconds, 0.0 when ffprobe cannot tell."""
    try:
        probe_out = subprocess.run(
            [
                "ffprobe", "-v", "quiet", "-print_format", "json",
                "-show_format", str(path),
            ],
            capture_output=True, text=True, timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning(f"ffprobe unavailable for {path.name}: {e}")
        return 0.0
    if probe_out.returncode != 0:
        return 0.0
    try:
        probe = json.loads(probe_out.stdout or "{}")
        return round(float(probe.get("format", {}).get("duration", 0.0)), 3)
    except (AttributeError, TypeError, ValueError):
        return 0.0


class MediaStorage:
    """Thin async facade over a boto3 S3 client pointed at MinIO."""

    def __init__(self, settings: Settings):
        self._settings = settings
        self._client = None

    @property
    def client(self):
        if self._client is None:
            scheme = "https" if self._settings.minio_secure else "http"
            self._client = boto3.client(
                "s3",
                endpoint_url=f"{scheme}://{self._settings.minio_endpoint}",
                aws_access_key_id=self._settings.minio_access_key,
                aws_secret_access_key=self._settings.minio_secret_key,
            )
        return self._client

    def url_for(self, key: str) -> str:
        return f"{self._settings.media_base_url}/{key}"

    def key_for(self, url: str) -> Optional[str]:
        prefix = f"{self._settings.media_base_url}/"
        return url[len(prefix):] if url.startswith(prefix) else None

    async def upload(self, upload: UploadFile, folder: str, probe: bool = False) -> UploadedMedia:
        """Store ``upload`` under ``folder/``; raises MediaStorageError on any failure."""
        ext = os.path.splitext(upload.filename or "")[1].lower()
        key = f"{folder}/{uuid.uuid4().hex}{ext}"

        os.makedirs(self._settings.temp_dir, exist_ok=True)
        work_dir = Path(tempfile.mkdtemp(prefix="streamhub_", dir=self._settings.temp_dir))
        local_path = work_dir / f"upload{ext}"
        try:
            with open(local_path, "wb") as f:
                while chunk := await upload.read(1024 * 1024):
                    f.write(chunk)

            duration = None
            if probe:
                duration = await asyncio.to_thread(
                    probe_duration, local_path, self._settings.ffprobe_timeout_seconds,
                )

            extra = {"ContentType": upload.content_type} if upload.content_type else {}
            await asyncio.to_thread(
                self.client.upload_file, str(local_path), self._settings.minio_bucket, key,
                ExtraArgs=extra,
            )
        except (BotoCoreError, ClientError, OSError) as e:
            logger.error(f"Media upload failed for {upload.filename}: {e}")
            raise MediaStorageError(str(e)) from e
        finally:
            shutil.rmtree(work_dir, ignore_errors=True)

        logger.info(f"Uploaded media {key}")
        return UploadedMedia(url=self.url_for(key), key=key, duration=duration)

    async def delete(self, url: str):
        key = self.key_for(url)
        if not key:
            logger.warning(f"Not a managed media URL, skipping delete: {url}")
            return
        try:
            await asyncio.to_thread(self.client.delete_object, Bucket=self._settings.minio_bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise MediaStorageError(str(e)) from e
        logger.info(f"Deleted media {key}")


_storage: Optional[MediaStorage] = None


def get_media_storage() -> MediaStorage:
    global _storage
    if _storage is None:
        _storage = MediaStorage(get_settings())
    return _storage
