"""Cloudflare R2 file storage service (image uploads)."""

from __future__ import annotations

import asyncio
import logging
from pathlib import PurePosixPath
from uuid import UUID, uuid4

import aioboto3
from botocore.exceptions import ClientError

from backend.config import settings

logger = logging.getLogger(__name__)

# Retryable S3 error codes
_RETRYABLE_CODES = {"RequestTimeout", "ServiceUnavailable", "ThrottlingException", "Throttling"}

# Accepted image types and the extension stored for each.
IMAGE_EXTENSIONS: dict[str, str] = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}


def image_key(user_id: UUID | str, content_type: str, filename: str | None = None) -> str:
    """
    Storage key for an uploaded image: uploads/{user_id}/{uuid}{ext}.

    The extension comes from the content type; the client filename is only
    used when the type has no canonical extension.
    """
    ext = IMAGE_EXTENSIONS.get(content_type)
    if ext is None:
        suffix = PurePosixPath(filename or "").suffix.lower()
        ext = suffix if suffix.isascii() and 1 < len(suffix) <= 6 else ""
    return f"uploads/{user_id}/{uuid4()}{ext}"


class R2Service:
    """Cloudflare R2 storage service using S3-compatible API."""

    def __init__(self) -> None:
        """Initialize R2 service with credentials from settings."""
        self.session = aioboto3.Session()
        self.endpoint = settings.R2_ENDPOINT
        self.access_key = settings.R2_ACCESS_KEY
        self.secret_key = settings.R2_SECRET_KEY

    def public_url(self, key: str) -> str:
        """Public URL for a stored object, served from the bucket's public domain."""
        if not settings.R2_PUBLIC_URL:
            raise RuntimeError("R2_PUBLIC_URL is not configured")
        return f"{settings.R2_PUBLIC_URL.rstrip('/')}/{key}"

    async def upload_image(
        self,
        user_id: UUID | str,
        data: bytes,
        content_type: str,
        filename: str | None = None,
        max_retries: int = 1,
    ) -> str:
        """
        Upload an image for a user with retry on transient failures.

        Args:
            user_id: Owner of the upload (first path segment under uploads/)
            data: Raw image bytes
            content_type: MIME type stored with the object
            filename: Original client filename, used only for the extension fallback
            max_retries: Number of retries on transient failures (default 1)

        Returns:
            R2 key (path) where the image was uploaded
        """
        bucket = settings.R2_UPLOADS_BUCKET
        key = image_key(user_id, content_type, filename)
        last_error: Exception | None = None

        for attempt in range(max_retries + 1):
            try:
                async with self.session.client(
                    "s3",
                    endpoint_url=self.endpoint,
                    aws_access_key_id=self.access_key,
                    aws_secret_access_key=self.secret_key,
                ) as s3:
                    await s3.put_object(
                        Bucket=bucket,
                        Key=key,
                        Body=data,
                        ContentType=content_type,
                    )
                return key
            except ClientError as e:
                error_code = e.response.get("Error", {}).get("Code", "")
                if error_code in _RETRYABLE_CODES and attempt < max_retries:
                    wait_time = 2**attempt
                    logger.warning("R2 upload error (attempt %d), retrying in %ds: %s", attempt + 1, wait_time, e)
                    await asyncio.sleep(wait_time)
                    last_error = e
                else:
                    raise
            except Exception as e:
                # Network errors, timeouts, etc.
                if attempt < max_retries:
                    wait_time = 2**attempt
                    logger.warning("R2 upload error (attempt %d), retrying in %ds: %s", attempt + 1, wait_time, e)
                    await asyncio.sleep(wait_time)
                    last_error = e
                else:
                    raise

        raise last_error  # type: ignore[misc]


# Singleton instance
r2_service = R2Service()


def get_r2_service() -> R2Service:
    """FastAPI dependency for the shared R2Service."""
    return r2_service
