"""
Media hosting abstraction for Cloudinary and in-memory testing.
"""

from __future__ import annotations

import io
import logging
import uuid
from dataclasses import dataclass, field
from typing import Optional, Protocol

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from starlette.concurrency import run_in_threadpool

from events_backend.errors import MediaUploadError

logger = logging.getLogger(__name__)


@dataclass
class UploadResult:
    secure_url: str
    public_id: str


class MediaClient(Protocol):
    """Defines the operations the API needs from the media service."""

    async def upload_image(self, data: bytes, *, folder: str) -> UploadResult:
        ...


@dataclass
class InMemoryMediaClient:
    """Test double for media uploads."""

    base_url: str = "https://media.example.test"
    uploads: dict = field(default_factory=dict)

    async def upload_image(self, data: bytes, *, folder: str) -> UploadResult:
        public_id = f"{folder}/{uuid.uuid4().hex}"
        self.uploads[public_id] = data
        return UploadResult(
            secure_url=f"{self.base_url}/image/upload/{public_id}",
            public_id=public_id,
        )

    def reset(self) -> None:
        self.uploads.clear()


@dataclass
class CloudinaryMediaClient:
    """
    Cloudinary-backed uploads. With no explicit credentials the SDK falls back
    to the ``CLOUDINARY_URL`` environment variable.
    """

    cloud_name: Optional[str] = None
    api_key: Optional[str] = None
    api_secret: Optional[str] = None

    def __post_init__(self):
        if self.cloud_name:
            cloudinary.config(
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
            )
        cloudinary.config(secure=True)

    def _upload(self, data: bytes, folder: str) -> dict:
        return cloudinary.uploader.upload(
            io.BytesIO(data), resource_type="image", folder=folder
        )

    async def upload_image(self, data: bytes, *, folder: str) -> UploadResult:
        try:
            result = await run_in_threadpool(self._upload, data, folder)
        except CloudinaryError as exc:
            raise MediaUploadError("Image upload failed", error=str(exc)) from exc
        logger.info("Uploaded image %s", result.get("public_id"))
        return UploadResult(
            secure_url=result["secure_url"], public_id=result["public_id"]
        )
