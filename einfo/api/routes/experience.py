"""Work Experience Routes: CRUD, reorder, batch sync and per-experience projects.

Invariants:
    - Every route requires a user token; experiences are scoped to the caller
    - Projects belong to one experience and are hard-deleted
    - Static paths (/reorder, /batch, /{id}/projects/reorder) precede their
      parameterized siblings
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.api.dependencies import get_current_user
from einfo.api.responses import ok
from einfo.core.profile_shape import shape_experience, shape_work_project
from einfo.infrastructure.database import get_db
from einfo.models.user import User
from einfo.schemas.resources import (
    ExperienceBatch, ExperienceCreate, ExperienceReorder, ExperienceUpdate,
    WorkProjectIn, WorkProjectReorder, WorkProjectUpdate,
)
from einfo.services import resource_sync
from einfo.services.resource_sync import EXPERIENCE

router = APIRouter(prefix="/api/experience", tags=["experience"])


@router.put("/reorder")
async def reorder_experiences(
    body: ExperienceReorder,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.reorder(db, EXPERIENCE, user.id, body.experience_ids)
    return ok(
        {"experiences": [shape_experience(r) for r in rows]},
        "Work experiences reordered successfully",
    )


@router.post("/batch")
async def batch_update_experiences(
    body: ExperienceBatch,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.batch_sync(db, EXPERIENCE, user.id, body.experiences)
    return ok(
        {"experiences": [shape_experience(r) for r in rows]},
        "Work experiences updated successfully",
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_experience(
    body: ExperienceCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.create_row(db, EXPERIENCE, user.id, body)
    return ok(
        {"experience": shape_experience(row)}, "Work experience created successfully",
    )


@router.get("")
async def list_experiences(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.list_active(db, EXPERIENCE, user.id)
    return ok(
        {"experiences": [shape_experience(r) for r in rows]},
        "Work experiences retrieved successfully",
    )


@router.get("/{experience_id}")
async def get_experience(
    experience_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.get_owned(db, EXPERIENCE, user.id, experience_id)
    return ok(
        {"experience": shape_experience(row)},
        "Work experience retrieved successfully",
    )


@router.put("/{experience_id}")
async def update_experience(
    experience_id: UUID,
    body: ExperienceUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.update_row(db, EXPERIENCE, user.id, experience_id, body)
    return ok(
        {"experience": shape_experience(row)}, "Work experience updated successfully",
    )


@router.delete("/{experience_id}")
async def delete_experience(
    experience_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await resource_sync.soft_delete(db, EXPERIENCE, user.id, experience_id)
    return ok(message="Work experience deleted successfully")


# ─── Experience projects ────────────────────────────────────────

@router.put("/{experience_id}/projects/reorder")
async def reorder_experience_projects(
    experience_id: UUID,
    body: WorkProjectReorder,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    projects = await resource_sync.reorder_children(
        db, EXPERIENCE, user.id, experience_id, body.project_ids,
    )
    return ok(
        {"projects": [shape_work_project(p) for p in projects]},
        "Experience projects reordered successfully",
    )


@router.post("/{experience_id}/projects", status_code=status.HTTP_201_CREATED)
async def add_experience_project(
    experience_id: UUID,
    body: WorkProjectIn,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    project = await resource_sync.add_child(
        db, EXPERIENCE, user.id, experience_id, body,
    )
    return ok(
        {"project": shape_work_project(project)},
        "Experience project added successfully",
    )


@router.put("/{experience_id}/projects/{project_id}")
async def update_experience_project(
    experience_id: UUID,
    project_id: UUID,
    body: WorkProjectUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    project = await resource_sync.update_child(
        db, EXPERIENCE, user.id, experience_id, project_id, body,
    )
    return ok(
        {"project": shape_work_project(project)},
        "Experience project updated successfully",
    )


@router.delete("/{experience_id}/projects/{project_id}")
async def remove_experience_project(
    experience_id: UUID,
    project_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await resource_sync.delete_child(
        db, EXPERIENCE, user.id, experience_id, project_id,
    )
    return ok(message="Experience project removed successfully")
