"""Extracurricular Routes: CRUD, reorder and batch sync over the caller's activities."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.api.dependencies import get_current_user
from einfo.api.responses import ok
from einfo.core.profile_shape import shape_extracurricular
from einfo.infrastructure.database import get_db
from einfo.models.user import User
from einfo.schemas.resources import (
    ExtracurricularBatch, ExtracurricularCreate, ExtracurricularReorder,
    ExtracurricularUpdate,
)
from einfo.services import resource_sync
from einfo.services.resource_sync import EXTRACURRICULARS

router = APIRouter(prefix="/api/extracurriculars", tags=["extracurriculars"])


@router.put("/reorder")
async def reorder_extracurriculars(
    body: ExtracurricularReorder,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.reorder(
        db, EXTRACURRICULARS, user.id, body.extracurricular_ids,
    )
    return ok(
        {"extracurriculars": [shape_extracurricular(r) for r in rows]},
        "Extracurricular activities reordered successfully",
    )


@router.post("/batch")
async def batch_update_extracurriculars(
    body: ExtracurricularBatch,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.batch_sync(
        db, EXTRACURRICULARS, user.id, body.extracurriculars,
    )
    return ok(
        {"extracurriculars": [shape_extracurricular(r) for r in rows]},
        "Extracurricular activities updated successfully",
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_extracurricular(
    body: ExtracurricularCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.create_row(db, EXTRACURRICULARS, user.id, body)
    return ok(
        {"extracurricular": shape_extracurricular(row)},
        "Extracurricular activity created successfully",
    )


@router.get("")
async def list_extracurriculars(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.list_active(db, EXTRACURRICULARS, user.id)
    return ok(
        {"extracurriculars": [shape_extracurricular(r) for r in rows]},
        "Extracurricular activities retrieved successfully",
    )


@router.get("/{extracurricular_id}")
async def get_extracurricular(
    extracurricular_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.get_owned(
        db, EXTRACURRICULARS, user.id, extracurricular_id,
    )
    return ok(
        {"extracurricular": shape_extracurricular(row)},
        "Extracurricular activity retrieved successfully",
    )


@router.put("/{extracurricular_id}")
async def update_extracurricular(
    extracurricular_id: UUID,
    body: ExtracurricularUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.update_row(
        db, EXTRACURRICULARS, user.id, extracurricular_id, body,
    )
    return ok(
        {"extracurricular": shape_extracurricular(row)},
        "Extracurricular activity updated successfully",
    )


@router.delete("/{extracurricular_id}")
async def delete_extracurricular(
    extracurricular_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await resource_sync.soft_delete(db, EXTRACURRICULARS, user.id, extracurricular_id)
    return ok(message="Extracurricular activity deleted successfully")
