import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from starlette.concurrency import run_in_threadpool

from app import dependencies as deps
from app.schemas.auth import CurrentUser
from app.schemas.image import UploadedImage
from app.security import get_current_user
from app.services.image_service import (
    ImageTooLargeError,
    StorageNotConfiguredError,
    get_content_type_from_filename,
)

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_FILENAME = "upload.jpg"


@router.post("/upload", response_model=UploadedImage)
async def upload_inline_image(
    user: CurrentUser = Depends(get_current_user),
    image: UploadFile = File(...),
    storage=Depends(deps.get_inline_storage),
):
    """Accept an image and return it as an inline data URL."""
    return await _store_upload(image, storage, user)


@router.post("/images", response_model=UploadedImage)
async def upload_hosted_image(
    user: CurrentUser = Depends(get_current_user),
    image: UploadFile = File(...),
    storage=Depends(deps.get_cloudinary_storage),
):
    """Upload an image to the configured image host."""
    return await _store_upload(image, storage, user)


async def _store_upload(image: UploadFile, storage, user: CurrentUser) -> UploadedImage:
    filename = image.filename or DEFAULT_FILENAME
    content_type = image.content_type or get_content_type_from_filename(filename)
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are allowed")

    data = await image.read()
    try:
        stored = await run_in_threadpool(storage.store, data, filename, content_type)
    except ImageTooLargeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageNotConfiguredError as e:
        logger.error(f"Image storage unavailable: {e}")
        raise HTTPException(status_code=500, detail="Upload failed")
    except Exception as e:
        logger.error(f"Upload of {filename} failed: {e}")
        raise HTTPException(status_code=500, detail="Upload failed")

    logger.info(f"Image uploaded: {filename} ({len(data)} bytes) by {user.username}")
    return UploadedImage(
        id=str(uuid.uuid4()),
        url=stored.url,
        filename=filename,
        size=len(data),
        uploadedAt=datetime.now(timezone.utc).isoformat(),
        uploadedBy=user.username,
        width=stored.width,
        height=stored.height,
        publicId=stored.public_id,
    )
