"""Service objects for interacting with S3-compatible object storage."""

from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import UTC, datetime
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from config.storage import (
    AUDIO_BUCKET,
    STORAGE_ENDPOINT_URL,
    STORAGE_PUBLIC_BASE_URL,
    STORAGE_REGION,
)
from core.exceptions import ConfigurationError, StorageError

from .clients import get_s3_client

logger = logging.getLogger(__name__)

_MISSING_BUCKET_CODES = {"404", "NoSuchBucket", "NotFound"}
_BUCKET_RACE_CODES = {"BucketAlreadyOwnedByYou", "BucketAlreadyExists"}
_CONTENT_TYPES = {"mp3": "audio/mpeg", "wav": "audio/wav", "ogg": "audio/ogg"}


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


def build_audio_path(prefix: str, owner_id: str, *, extension: str = "mp3", now: datetime | None = None) -> str:
    """Return ``{prefix}/{owner_id}/audio_{epoch_ms}_{rand}.{extension}``."""

    timestamp = int((now or datetime.now(UTC)).timestamp() * 1000)
    return f"{prefix}/{owner_id}/audio_{timestamp}_{uuid.uuid4().hex[:8]}.{extension}"


class StorageService:
    """Handle bucket provisioning, uploads and object lifecycle for audio."""

    def __init__(
        self,
        *,
        bucket_name: str | None = None,
        s3_client: Any | None = None,
        public_base_url: str | None = None,
    ) -> None:
        client = s3_client or get_s3_client()
        if client is None:
            raise ConfigurationError("S3 client not initialised", key="AWS credentials")

        self._s3_client = client
        self._bucket_name = bucket_name or AUDIO_BUCKET
        if not self._bucket_name:
            raise ConfigurationError("AUDIO_BUCKET must be configured", key="AUDIO_BUCKET")
        self._public_base_url = (public_base_url if public_base_url is not None else STORAGE_PUBLIC_BASE_URL).rstrip("/")
        self._region = STORAGE_REGION or ""
        self._bucket_ready = False
        self._bucket_lock = asyncio.Lock()

        logger.debug("StorageService initialised", extra={"bucket": self._bucket_name})

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    async def ensure_bucket(self) -> None:
        """Create the bucket when it does not exist yet.

        Concurrent creators may win the race; ``BucketAlreadyOwnedByYou`` and
        ``BucketAlreadyExists`` are treated as success.
        """

        if self._bucket_ready:
            return

        async with self._bucket_lock:
            if self._bucket_ready:
                return

            try:
                await asyncio.to_thread(self._s3_client.head_bucket, Bucket=self._bucket_name)
            except ClientError as exc:
                if _error_code(exc) not in _MISSING_BUCKET_CODES:
                    raise StorageError(
                        f"Could not verify bucket {self._bucket_name}",
                        operation="head_bucket",
                        original_error=exc,
                    ) from exc
                await self._create_bucket()
            except BotoCoreError as exc:
                raise StorageError(
                    f"Could not verify bucket {self._bucket_name}",
                    operation="head_bucket",
                    original_error=exc,
                ) from exc

            self._bucket_ready = True

    async def _create_bucket(self) -> None:
        params: dict[str, Any] = {"Bucket": self._bucket_name}
        if self._region and self._region != "us-east-1" and not STORAGE_ENDPOINT_URL:
            params["CreateBucketConfiguration"] = {"LocationConstraint": self._region}

        logger.info("Creating storage bucket %s", self._bucket_name)
        try:
            await asyncio.to_thread(self._s3_client.create_bucket, **params)
        except ClientError as exc:
            if _error_code(exc) in _BUCKET_RACE_CODES:
                logger.info("Bucket %s was created concurrently", self._bucket_name)
                return
            raise StorageError(
                f"Could not create bucket {self._bucket_name}",
                operation="create_bucket",
                original_error=exc,
            ) from exc
        except BotoCoreError as exc:
            raise StorageError(
                f"Could not create bucket {self._bucket_name}",
                operation="create_bucket",
                original_error=exc,
            ) from exc

    async def upload_audio(self, *, audio_bytes: bytes, path: str, file_extension: str = "mp3") -> str:
        """Upload generated audio bytes to ``path`` and return the public URL."""

        if not audio_bytes:
            raise StorageError("Cannot upload empty audio payload", operation="upload")

        await self.ensure_bucket()
        logger.info("Uploading generated audio bucket=%s key=%s", self._bucket_name, path)

        try:
            await asyncio.to_thread(
                self._s3_client.put_object,
                Bucket=self._bucket_name,
                Key=path,
                Body=audio_bytes,
                ContentType=_CONTENT_TYPES.get(file_extension, "application/octet-stream"),
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError("Audio upload failed", operation="upload", original_error=exc) from exc

        url = self.public_url(path)
        logger.info("Audio uploaded successfully to %s", url)
        return url

    async def copy_object(self, *, source_path: str, target_path: str) -> str:
        """Copy ``source_path`` to ``target_path`` and return the new public URL."""

        try:
            await asyncio.to_thread(
                self._s3_client.copy_object,
                Bucket=self._bucket_name,
                Key=target_path,
                CopySource={"Bucket": self._bucket_name, "Key": source_path},
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError("Audio copy failed", operation="copy", original_error=exc) from exc
        return self.public_url(target_path)

    async def delete_object(self, path: str) -> None:
        """Delete ``path`` from the bucket."""

        try:
            await asyncio.to_thread(self._s3_client.delete_object, Bucket=self._bucket_name, Key=path)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError("Audio delete failed", operation="delete", original_error=exc) from exc

    def public_url(self, path: str) -> str:
        """Return the public URL for ``path``."""

        if self._public_base_url:
            return f"{self._public_base_url}/{self._bucket_name}/{path}"
        if self._region:
            return f"https://{self._bucket_name}.s3.{self._region}.amazonaws.com/{path}"
        return f"https://{self._bucket_name}.s3.amazonaws.com/{path}"


__all__ = ["StorageService", "build_audio_path"]
