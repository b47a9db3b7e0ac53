"""Achievement Routes: CRUD, reorder and batch sync over the caller's achievements."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.api.dependencies import get_current_user
from einfo.api.responses import ok
from einfo.core.profile_shape import shape_achievement
from einfo.infrastructure.database import get_db
from einfo.models.user import User
from einfo.schemas.resources import (
    AchievementBatch, AchievementCreate, AchievementReorder, AchievementUpdate,
)
from einfo.services import resource_sync
from einfo.services.resource_sync import ACHIEVEMENTS

router = APIRouter(prefix="/api/achievements", tags=["achievements"])


@router.put("/reorder")
async def reorder_achievements(
    body: AchievementReorder,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.reorder(db, ACHIEVEMENTS, user.id, body.achievement_ids)
    return ok(
        {"achievements": [shape_achievement(r) for r in rows]},
        "Achievements reordered successfully",
    )


@router.post("/batch")
async def batch_update_achievements(
    body: AchievementBatch,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.batch_sync(db, ACHIEVEMENTS, user.id, body.achievements)
    return ok(
        {"achievements": [shape_achievement(r) for r in rows]},
        "Achievements updated successfully",
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_achievement(
    body: AchievementCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.create_row(db, ACHIEVEMENTS, user.id, body)
    return ok({"achievement": shape_achievement(row)}, "Achievement created successfully")


@router.get("")
async def list_achievements(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.list_active(db, ACHIEVEMENTS, user.id)
    return ok(
        {"achievements": [shape_achievement(r) for r in rows]},
        "Achievements retrieved successfully",
    )


@router.get("/{achievement_id}")
async def get_achievement(
    achievement_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.get_owned(db, ACHIEVEMENTS, user.id, achievement_id)
    return ok({"achievement": shape_achievement(row)}, "Achievement retrieved successfully")


@router.put("/{achievement_id}")
async def update_achievement(
    achievement_id: UUID,
    body: AchievementUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.update_row(
        db, ACHIEVEMENTS, user.id, achievement_id, body,
    )
    return ok({"achievement": shape_achievement(row)}, "Achievement updated successfully")


@router.delete("/{achievement_id}")
async def delete_achievement(
    achievement_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await resource_sync.soft_delete(db, ACHIEVEMENTS, user.id, achievement_id)
    return ok(message="Achievement deleted successfully")
