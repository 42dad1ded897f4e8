"""Image upload routes. The returned URL is what `image` nodes reference."""

from __future__ import annotations

import logging
from uuid import UUID

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from backend.auth import get_current_user_id
from backend.config import settings
from backend.models.sdui import UploadResponse
from backend.services.r2 import IMAGE_EXTENSIONS, R2Service, get_r2_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/uploads", tags=["uploads"])


@router.post("/images", status_code=201, response_model=UploadResponse)
async def upload_image(
    file: UploadFile = File(...),
    user_id: UUID = Depends(get_current_user_id),
    r2: R2Service = Depends(get_r2_service),
) -> UploadResponse:
    """
    Store one image in R2.

    415 for non-image types, 413 over UPLOAD_MAX_BYTES, 400 when empty,
    502 when storage fails after retry.
    """
    content_type = (file.content_type or "").split(";")[0].strip().lower()
    if content_type not in IMAGE_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"Unsupported image type. Allowed: {', '.join(sorted(IMAGE_EXTENSIONS))}.",
        )

    # Read one byte past the limit so oversize uploads are detected without buffering them whole.
    data = await file.read(settings.UPLOAD_MAX_BYTES + 1)
    if len(data) > settings.UPLOAD_MAX_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Image exceeds {settings.UPLOAD_MAX_BYTES // (1024 * 1024)} MB.",
        )
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty file.")

    try:
        key = await r2.upload_image(user_id, data, content_type, filename=file.filename)
    except (ClientError, BotoCoreError) as e:
        logger.exception("Image upload failed for %s", user_id)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Upload failed. Please try again.") from e

    logger.info("Uploaded %s (%d bytes)", key, len(data))
    return UploadResponse(key=key, url=r2.public_url(key))
