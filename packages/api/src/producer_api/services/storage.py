# This project was developed with assistance from AI tools.
"""S3-compatible object storage service backed by MinIO.

Uses boto3 synchronous client run in a thread-pool executor for async
compatibility. The module exposes a singleton initialised at app startup
via ``init_storage_service()``.
"""

import asyncio
import logging
import os
import re
import time
from datetime import UTC, datetime
from functools import partial

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from ..core.config import Settings
from ..schemas.document import FileUpload

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class StorageError(RuntimeError):
    """Raised when the blob store rejects or cannot complete an operation."""


class StorageService:
    """Thin wrapper around a boto3 S3 client."""

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        secret_key: str,
        bucket: str,
        public_base_url: str,
        region: str = "us-east-1",
    ):
        self._bucket = bucket
        self._public_base_url = public_base_url.rstrip("/")
        self._client = boto3.client(
            "s3",
            endpoint_url=endpoint,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
            config=BotoConfig(
                signature_version="s3v4",
                s3={
                    "addressing_style": "path",
                    "use_accelerate_endpoint": False,
                },
            ),
        )
        self._ensure_bucket()

    def _ensure_bucket(self) -> None:
        """Create the bucket if it doesn't already exist (dev convenience)."""
        try:
            self._client.head_bucket(Bucket=self._bucket)
        except ClientError:
            logger.info("Creating S3 bucket: %s", self._bucket)
            self._client.create_bucket(Bucket=self._bucket)

    async def _run(self, func, **kwargs):
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, partial(func, **kwargs))
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"Blob store operation failed: {exc}") from exc

    async def upload_file(
        self,
        file_data: bytes,
        *,
        prefix: str,
        filename: str,
        content_type: str,
    ) -> FileUpload:
        """Store bytes under ``prefix`` and return a publicly fetchable reference."""
        object_key = self.build_object_key(prefix, filename)
        await self._run(
            self._client.put_object,
            Bucket=self._bucket,
            Key=object_key,
            Body=file_data,
            ContentType=content_type,
        )
        logger.info("Uploaded %s (%d bytes)", object_key, len(file_data))
        return FileUpload(
            url=self.public_url(object_key),
            file_name=filename,
            object_key=object_key,
            uploaded_at=datetime.now(UTC),
            file_size=len(file_data),
        )

    async def delete_file(self, reference: str) -> None:
        """Delete an object by public URL or bare object key."""
        object_key = self.object_key_from_url(reference)
        await self._run(self._client.delete_object, Bucket=self._bucket, Key=object_key)
        logger.info("Deleted %s", object_key)

    def public_url(self, object_key: str) -> str:
        return f"{self._public_base_url}/{object_key}"

    def object_key_from_url(self, reference: str) -> str:
        """Strip the public base URL if present; anything else is taken as a key."""
        prefix = f"{self._public_base_url}/"
        if reference.startswith(prefix):
            return reference[len(prefix):]
        return reference

    @staticmethod
    def build_object_key(prefix: str, filename: str) -> str:
        """Build the S3 object key: {prefix}/{epoch_millis}_{filename}.

        Strips path components from filename to prevent path traversal attacks.
        """
        safe_name = _UNSAFE_CHARS.sub("_", os.path.basename(filename)) or "document.pdf"
        return f"{prefix.strip('/')}/{int(time.time() * 1000)}_{safe_name}"

    @staticmethod
    def build_document_prefix(application_id: str) -> str:
        """All documents for one application live under its id."""
        return f"applications/{application_id}/documents"


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_service: StorageService | None = None


def init_storage_service(cfg: Settings) -> StorageService:
    """Initialise the singleton (called once from app lifespan)."""
    global _service  # noqa: PLW0603
    _service = StorageService(
        endpoint=cfg.S3_ENDPOINT,
        access_key=cfg.S3_ACCESS_KEY,
        secret_key=cfg.S3_SECRET_KEY,
        bucket=cfg.S3_BUCKET,
        public_base_url=cfg.s3_public_base_url,
        region=cfg.S3_REGION,
    )
    logger.info("StorageService initialised (bucket=%s)", cfg.S3_BUCKET)
    return _service


def get_storage_service() -> StorageService:
    """Return the initialised StorageService singleton."""
    if _service is None:
        raise RuntimeError("StorageService not initialised -- call init_storage_service() first")
    return _service
