"""Education Routes: CRUD, reorder and batch sync over the caller's education entries."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.api.dependencies import get_current_user
from einfo.api.responses import ok
from einfo.core.profile_shape import shape_education
from einfo.infrastructure.database import get_db
from einfo.models.user import User
from einfo.schemas.resources import (
    EducationBatch, EducationCreate, EducationReorder, EducationUpdate,
)
from einfo.services import resource_sync
from einfo.services.resource_sync import EDUCATION

router = APIRouter(prefix="/api/education", tags=["education"])


@router.put("/reorder")
async def reorder_education(
    body: EducationReorder,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.reorder(db, EDUCATION, user.id, body.education_ids)
    return ok(
        {"educations": [shape_education(r) for r in rows]},
        "Education entries reordered successfully",
    )


@router.post("/batch")
async def batch_update_education(
    body: EducationBatch,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.batch_sync(db, EDUCATION, user.id, body.educations)
    return ok(
        {"educations": [shape_education(r) for r in rows]},
        "Education entries updated successfully",
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_education(
    body: EducationCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.create_row(db, EDUCATION, user.id, body)
    return ok(
        {"education": shape_education(row)}, "Education entry created successfully",
    )


@router.get("")
async def list_education(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.list_active(db, EDUCATION, user.id)
    return ok(
        {"educations": [shape_education(r) for r in rows]},
        "Education entries retrieved successfully",
    )


@router.get("/{education_id}")
async def get_education(
    education_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.get_owned(db, EDUCATION, user.id, education_id)
    return ok(
        {"education": shape_education(row)}, "Education entry retrieved successfully",
    )


@router.put("/{education_id}")
async def update_education(
    education_id: UUID,
    body: EducationUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.update_row(db, EDUCATION, user.id, education_id, body)
    return ok(
        {"education": shape_education(row)}, "Education entry updated successfully",
    )


@router.delete("/{education_id}")
async def delete_education(
    education_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await resource_sync.soft_delete(db, EDUCATION, user.id, education_id)
    return ok(message="Education entry deleted successfully")
