"""Uploads: validate, resize and store user files; persist the URLs that need it.

Invariants:
    - Every upload is checked for presence, size and MIME type before any decoding
    - Images are re-encoded as JPEG off the event loop before storage
    - Public ids embed the owner's user id: <kind>_<userId>_<uuid4>
    - Profile image and resume URLs are written to the profile row; portfolio and
      education images are returned only (the editor saves them with the entry)
    - Deleting requires the public id to contain the caller's id
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.config import get_settings
from einfo.core.errors import (
    PermissionDeniedError, RequestRejectedError, UploadRejectedError,
)
from einfo.infrastructure.image_processing import (
    ALLOWED_IMAGE_TYPES, EDUCATION_IMAGE, PORTFOLIO_IMAGE, PROFILE_IMAGE,
    ImageSpec, process_image,
)
from einfo.infrastructure.media_store import CloudinaryMediaStore, StoredMedia
from einfo.models.user import User
from einfo.services.profile_aggregate import upsert_profile

logger = logging.getLogger(__name__)

PDF_TYPE = "application/pdf"
RESUME_FOLDER = "resumes"


@dataclass(frozen=True)
class ImageTarget:
    prefix: str
    folder: str
    spec: ImageSpec


PROFILE_TARGET = ImageTarget("profile", "profiles", PROFILE_IMAGE)
PORTFOLIO_TARGET = ImageTarget("portfolio", "portfolio", PORTFOLIO_IMAGE)
EDUCATION_TARGET = ImageTarget("education", "education", EDUCATION_IMAGE)


def owned_public_id(prefix: str, user_id) -> str:
    return f"{prefix}_{user_id}_{uuid.uuid4()}"


async def read_upload(
    file: UploadFile | None, max_bytes: int, allowed_types: frozenset[str],
    type_message: str, size_message: str,
) -> bytes:
    """Read an upload into memory, enforcing the global and per-route limits."""
    if file is None:
        raise UploadRejectedError("No file uploaded")
    if (file.content_type or "").lower() not in allowed_types:
        raise UploadRejectedError(type_message)
    limit = min(max_bytes, get_settings().max_upload_bytes)
    data = await file.read(limit + 1)
    if not data:
        raise UploadRejectedError("No file uploaded")
    if len(data) > limit:
        raise UploadRejectedError(size_message)
    return data


async def store_image(
    store: CloudinaryMediaStore, user: User, data: bytes, target: ImageTarget,
) -> StoredMedia:
    processed = await asyncio.to_thread(process_image, data, target.spec)
    stored = await store.upload(
        processed, target.folder, owned_public_id(target.prefix, user.id),
    )
    logger.info(
        f"Stored {target.prefix} image",
        extra={"user_id": user.id, "public_id": stored.public_id},
    )
    return stored


async def save_profile_image(
    db: AsyncSession, store: CloudinaryMediaStore, user: User, file: UploadFile | None,
) -> StoredMedia:
    data = await read_upload(
        file,
        get_settings().profile_image_max_bytes,
        ALLOWED_IMAGE_TYPES,
        "Invalid file type. Only JPEG, PNG, WebP, and GIF images are allowed.",
        "File too large. Maximum size is 100KB for profile images.",
    )
    stored = await store_image(store, user, data, PROFILE_TARGET)
    profile = await upsert_profile(db, user)
    profile.profile_image_url = stored.url
    await db.commit()
    return stored


async def save_section_image(
    store: CloudinaryMediaStore, user: User, file: UploadFile | None,
    target: ImageTarget,
) -> StoredMedia:
    data = await read_upload(
        file,
        get_settings().max_upload_bytes,
        ALLOWED_IMAGE_TYPES,
        "Invalid file type. Only JPEG, PNG, WebP, and GIF images are allowed.",
        "File too large. Maximum size is 10MB.",
    )
    return await store_image(store, user, data, target)


async def save_resume(
    db: AsyncSession, store: CloudinaryMediaStore, user: User, file: UploadFile | None,
) -> StoredMedia:
    data = await read_upload(
        file,
        get_settings().max_upload_bytes,
        frozenset({PDF_TYPE}),
        "Only PDF files are allowed for resume",
        "File too large. Maximum size is 10MB.",
    )
    stored = await store.upload(
        data, RESUME_FOLDER, owned_public_id("resume", user.id),
        resource_type="raw", file_format="pdf",
    )
    profile = await upsert_profile(db, user)
    profile.resume_url = stored.url
    await db.commit()
    logger.info(
        "Stored resume", extra={"user_id": user.id, "public_id": stored.public_id},
    )
    return stored


async def delete_owned_file(
    store: CloudinaryMediaStore, user: User, public_id: str,
) -> None:
    if not public_id:
        raise RequestRejectedError("Public ID is required")
    if str(user.id) not in public_id:
        raise PermissionDeniedError("You don't have permission to delete this file")
    resource_type = "raw" if public_id.startswith(f"{RESUME_FOLDER}/") else "image"
    result = await store.destroy(public_id, resource_type=resource_type)
    if result != "ok":
        logger.warning(
            f"Cloudinary destroy returned {result!r}",
            extra={"user_id": user.id, "public_id": public_id},
        )
        raise RequestRejectedError("Failed to delete file")
    logger.info("Deleted file", extra={"user_id": user.id, "public_id": public_id})
