"""Upload Routes: multipart image/PDF uploads and owned-file deletion.

Invariants:
    - Every route requires a user token
    - Image routes take the form field "image"; the resume route takes "file"
    - Responses carry {url, publicId}
"""

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.api.dependencies import get_current_user, get_media_store
from einfo.api.responses import ok
from einfo.infrastructure.database import get_db
from einfo.infrastructure.media_store import CloudinaryMediaStore, StoredMedia
from einfo.models.user import User
from einfo.services import uploads

router = APIRouter(prefix="/api/upload", tags=["upload"])


def _stored(media: StoredMedia) -> dict:
    return {"url": media.url, "publicId": media.public_id}


@router.post("/profile-image")
async def upload_profile_image(
    image: UploadFile | None = File(None),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    store: CloudinaryMediaStore = Depends(get_media_store),
):
    media = await uploads.save_profile_image(db, store, user, image)
    return ok(_stored(media), "Profile image uploaded successfully")


@router.post("/portfolio-image")
async def upload_portfolio_image(
    image: UploadFile | None = File(None),
    user: User = Depends(get_current_user),
    store: CloudinaryMediaStore = Depends(get_media_store),
):
    media = await uploads.save_section_image(
        store, user, image, uploads.PORTFOLIO_TARGET,
    )
    return ok(_stored(media), "Portfolio image uploaded successfully")


@router.post("/education-image")
async def upload_education_image(
    image: UploadFile | None = File(None),
    user: User = Depends(get_current_user),
    store: CloudinaryMediaStore = Depends(get_media_store),
):
    media = await uploads.save_section_image(
        store, user, image, uploads.EDUCATION_TARGET,
    )
    return ok(_stored(media), "Education image uploaded successfully")


@router.post("/resume")
async def upload_resume(
    file: UploadFile | None = File(None),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    store: CloudinaryMediaStore = Depends(get_media_store),
):
    media = await uploads.save_resume(db, store, user, file)
    return ok(_stored(media), "Resume uploaded successfully")


@router.delete("/file/{public_id:path}")
async def delete_file(
    public_id: str,
    user: User = Depends(get_current_user),
    store: CloudinaryMediaStore = Depends(get_media_store),
):
    await uploads.delete_owned_file(store, user, public_id)
    return ok(message="File deleted successfully")
