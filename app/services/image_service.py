import base64
import hashlib
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Optional

import httpx

from app.settings import Settings

logger = logging.getLogger(__name__)

CLOUDINARY_UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"


class ImageUploadError(Exception):
    pass


class ImageTooLargeError(ImageUploadError):
    pass


class StorageNotConfiguredError(ImageUploadError):
    pass


@dataclass
class StoredImage:
    url: str
    width: Optional[int] = None
    height: Optional[int] = None
    public_id: Optional[str] = None


class InlineImageStorage:
    """Stores nothing remotely: the image comes back as a base64 data URL."""

    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes

    def store(self, data: bytes, filename: str, content_type: Optional[str] = None) -> StoredImage:
        _check_size(data, self.max_bytes)
        media_type = content_type or get_content_type_from_filename(filename)
        encoded = base64.b64encode(data).decode("ascii")
        return StoredImage(url=f"data:{media_type};base64,{encoded}")


class CloudinaryImageStorage:
    """Signed upload to Cloudinary."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str,
        max_bytes: int,
        client: Optional[httpx.Client] = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder
        self.max_bytes = max_bytes
        self.client = client or httpx.Client(timeout=30.0)

    @classmethod
    def from_settings(cls, current_settings: Settings) -> "CloudinaryImageStorage":
        return cls(
            cloud_name=current_settings.CLOUDINARY_CLOUD_NAME,
            api_key=current_settings.CLOUDINARY_API_KEY,
            api_secret=current_settings.CLOUDINARY_API_SECRET,
            folder=current_settings.CLOUDINARY_FOLDER,
            max_bytes=current_settings.CLOUDINARY_UPLOAD_MAX_BYTES,
        )

    def close(self) -> None:
        self.client.close()

    def store(self, data: bytes, filename: str, content_type: Optional[str] = None) -> StoredImage:
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise StorageNotConfiguredError("Cloudinary credentials not configured")
        _check_size(data, self.max_bytes)

        params = {
            "timestamp": int(time.time()),
            "public_id": f"{self.folder}/{uuid.uuid4()}",
            "folder": self.folder,
        }
        form = {
            **{key: str(value) for key, value in params.items()},
            "api_key": self.api_key,
            "signature": sign_params(params, self.api_secret),
        }
        media_type = content_type or get_content_type_from_filename(filename)

        response = self.client.post(
            CLOUDINARY_UPLOAD_URL.format(cloud_name=self.cloud_name),
            data=form,
            files={"file": (filename, data, media_type)},
        )
        if response.is_error:
            logger.error(f"Cloudinary rejected {filename}: {response.text}")
            raise ImageUploadError(f"Cloudinary upload failed: {response.status_code}")

        result = response.json()
        return StoredImage(
            url=result["secure_url"],
            width=result.get("width"),
            height=result.get("height"),
            public_id=result.get("public_id"),
        )


def sign_params(params: dict, api_secret: str) -> str:
    """Cloudinary signature: sha1 of the sorted `key=value` pairs plus the secret."""
    payload = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{payload}{api_secret}".encode("utf-8")).hexdigest()


def get_content_type_from_filename(filename: str) -> str:
    """
    Determine content type from file extension
    """
    filename = filename.lower()
    if filename.endswith((".jpg", ".jpeg")):
        return "image/jpeg"
    elif filename.endswith(".png"):
        return "image/png"
    elif filename.endswith(".gif"):
        return "image/gif"
    elif filename.endswith(".svg"):
        return "image/svg+xml"
    elif filename.endswith(".webp"):
        return "image/webp"
    else:
        return "application/octet-stream"


def _check_size(data: bytes, max_bytes: int) -> None:
    if len(data) > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise ImageTooLargeError(f"File size must be less than {limit_mb}MB")
