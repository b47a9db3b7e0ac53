"""Media Store: Cloudinary uploads and deletions.

Invariants:
    - upload() returns StoredMedia(url=secure_url, public_id)
    - Any Cloudinary failure raises ExternalServiceError (502)
    - destroy() returns Cloudinary's result string ("ok", "not found", ...)

Design Decisions:
    - The Cloudinary SDK is synchronous; every call runs in a worker thread
    - Credentials configured per instance from Settings, never from module import
"""

import asyncio
import io
import logging
from dataclasses import dataclass

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from einfo.core.errors import ExternalServiceError

logger = logging.getLogger(__name__)


@dataclass
class StoredMedia:
    url: str
    public_id: str


class CloudinaryMediaStore:
    """Thin async wrapper over cloudinary.uploader."""

    def __init__(self, cloud_name: str, api_key: str, api_secret: str):
        cloudinary.config(
            cloud_name=cloud_name, api_key=api_key,
            api_secret=api_secret, secure=True,
        )

    async def upload(
        self, data: bytes, folder: str, public_id: str,
        resource_type: str = "image", file_format: str | None = None,
    ) -> StoredMedia:
        options = {
            "folder": folder,
            "public_id": public_id,
            "resource_type": resource_type,
            "overwrite": True,
            "invalidate": True,
        }
        if file_format:
            options["format"] = file_format
        try:
            result = await asyncio.to_thread(
                cloudinary.uploader.upload, io.BytesIO(data), **options,
            )
        except CloudinaryError as e:
            logger.error(
                f"Cloudinary upload failed: {e}",
                extra={"public_id": f"{folder}/{public_id}"},
            )
            raise ExternalServiceError("cloudinary", "Failed to upload file")
        return StoredMedia(url=result["secure_url"], public_id=result["public_id"])

    async def destroy(self, public_id: str, resource_type: str = "image") -> str:
        try:
            result = await asyncio.to_thread(
                cloudinary.uploader.destroy, public_id,
                resource_type=resource_type, invalidate=True,
            )
        except CloudinaryError as e:
            logger.error(
                f"Cloudinary destroy failed: {e}", extra={"public_id": public_id},
            )
            raise ExternalServiceError("cloudinary", "Failed to delete file")
        return result.get("result", "")
