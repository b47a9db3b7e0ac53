"""Portfolio Routes: project CRUD, reorder, batch sync and project images.

Invariants:
    - Every route requires a user token; projects are scoped to the caller
    - Images belong to one project and are hard-deleted
    - Static paths (/reorder, /batch, /{id}/images/reorder) precede their
      parameterized siblings
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.api.dependencies import get_current_user
from einfo.api.responses import ok
from einfo.core.profile_shape import shape_portfolio, shape_portfolio_image
from einfo.infrastructure.database import get_db
from einfo.models.user import User
from einfo.schemas.resources import (
    PortfolioBatch, PortfolioCreate, PortfolioImageIn, PortfolioImageReorder,
    PortfolioReorder, PortfolioUpdate,
)
from einfo.services import resource_sync
from einfo.services.resource_sync import PORTFOLIO

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])


@router.put("/reorder")
async def reorder_projects(
    body: PortfolioReorder,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.reorder(db, PORTFOLIO, user.id, body.project_ids)
    return ok(
        {"projects": [shape_portfolio(r) for r in rows]},
        "Portfolio projects reordered successfully",
    )


@router.post("/batch")
async def batch_update_projects(
    body: PortfolioBatch,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.batch_sync(db, PORTFOLIO, user.id, body.projects)
    return ok(
        {"projects": [shape_portfolio(r) for r in rows]},
        "Portfolio projects updated successfully",
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    body: PortfolioCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.create_row(db, PORTFOLIO, user.id, body)
    return ok(
        {"project": shape_portfolio(row)}, "Portfolio project created successfully",
    )


@router.get("")
async def list_projects(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.list_active(db, PORTFOLIO, user.id)
    return ok(
        {"projects": [shape_portfolio(r) for r in rows]},
        "Portfolio projects retrieved successfully",
    )


@router.get("/{project_id}")
async def get_project(
    project_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.get_owned(db, PORTFOLIO, user.id, project_id)
    return ok(
        {"project": shape_portfolio(row)}, "Portfolio project retrieved successfully",
    )


@router.put("/{project_id}")
async def update_project(
    project_id: UUID,
    body: PortfolioUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await resource_sync.update_row(db, PORTFOLIO, user.id, project_id, body)
    return ok(
        {"project": shape_portfolio(row)}, "Portfolio project updated successfully",
    )


@router.delete("/{project_id}")
async def delete_project(
    project_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await resource_sync.soft_delete(db, PORTFOLIO, user.id, project_id)
    return ok(message="Portfolio project deleted successfully")


# ─── Project images ─────────────────────────────────────────────

@router.put("/{project_id}/images/reorder")
async def reorder_project_images(
    project_id: UUID,
    body: PortfolioImageReorder,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    images = await resource_sync.reorder_children(
        db, PORTFOLIO, user.id, project_id, body.image_ids,
    )
    return ok(
        {"images": [shape_portfolio_image(i) for i in images]},
        "Project images reordered successfully",
    )


@router.post("/{project_id}/images", status_code=status.HTTP_201_CREATED)
async def add_project_image(
    project_id: UUID,
    body: PortfolioImageIn,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    image = await resource_sync.add_child(db, PORTFOLIO, user.id, project_id, body)
    return ok({"image": shape_portfolio_image(image)}, "Project image added successfully")


@router.delete("/{project_id}/images/{image_id}")
async def remove_project_image(
    project_id: UUID,
    image_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await resource_sync.delete_child(db, PORTFOLIO, user.id, project_id, image_id)
    return ok(message="Project image removed successfully")
