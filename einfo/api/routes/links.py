"""Link Routes: CRUD, reorder and batch sync over the caller's profile links.

Invariants:
    - Every route requires a user token; rows are scoped to the caller
    - /reorder and /batch are declared before /{link_id}
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.api.dependencies import get_current_user
from einfo.api.responses import ok
from einfo.core.profile_shape import shape_link
from einfo.infrastructure.database import get_db
from einfo.models.user import User
from einfo.schemas.resources import LinkBatch, LinkCreate, LinkReorder, LinkUpdate
from einfo.services import resource_sync
from einfo.services.resource_sync import LINKS

router = APIRouter(prefix="/api/links", tags=["links"])


@router.put("/reorder")
async def reorder_links(
    body: LinkReorder,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.reorder(db, LINKS, user.id, body.link_ids)
    return ok({"links": [shape_link(r) for r in rows]}, "Links reordered successfully")


@router.post("/batch")
async def batch_update_links(
    body: LinkBatch,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.batch_sync(db, LINKS, user.id, body.links)
    return ok({"links": [shape_link(r) for r in rows]}, "Links updated successfully")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_link(
    body: LinkCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.create_row(db, LINKS, user.id, body)
    return ok({"link": shape_link(row)}, "Link created successfully")


@router.get("")
async def list_links(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.list_active(db, LINKS, user.id)
    return ok({"links": [shape_link(r) for r in rows]}, "Links retrieved successfully")


@router.get("/{link_id}")
async def get_link(
    link_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.get_owned(db, LINKS, user.id, link_id)
    return ok({"link": shape_link(row)}, "Link retrieved successfully")


@router.put("/{link_id}")
async def update_link(
    link_id: UUID,
    body: LinkUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.update_row(db, LINKS, user.id, link_id, body)
    return ok({"link": shape_link(row)}, "Link updated successfully")


@router.delete("/{link_id}")
async def delete_link(
    link_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await resource_sync.soft_delete(db, LINKS, user.id, link_id)
    return ok(message="Link deleted successfully")
