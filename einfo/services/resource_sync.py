"""Section Sync: CRUD, reorder and batch-sync for every list-type profile section.

Invariants:
    - Every read and write is scoped to (user_id, is_active=True)
    - Reorder and batch validate first (core/ordering.py), then write, then commit once
    - A rejected request writes nothing
    - Soft delete only flips is_active; child rows (projects, images) are hard-deleted
    - Non-nullable columns are never overwritten with None by a partial update

Design Decisions:
    - One SectionSpec per section instead of one service per section: the six
      controllers share the same contract and differ only in model, label and shaper
    - A payload that carries a child list syncs it like a batch: children keep
      their ids when referenced, unreferenced children are hard-deleted
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.core.domain_types import ResourceKind
from einfo.core.errors import ResourceNotFoundError
from einfo.core.ordering import (
    BatchPlan, next_display_order, plan_batch, plan_reorder,
)
from einfo.core import profile_shape
from einfo.models.achievement import Achievement
from einfo.models.education import Education
from einfo.models.extracurricular import Extracurricular
from einfo.models.portfolio_image import PortfolioImage
from einfo.models.portfolio_project import PortfolioProject
from einfo.models.profile_link import ProfileLink
from einfo.models.work_experience import WorkExperience
from einfo.models.work_project import WorkProject
from einfo.schemas.resources import CHILD_FIELDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChildSpec:
    """A hard-deleted child collection hanging off a section row."""
    attr: str            # relationship name on the parent and payload field name
    model: type
    label: str
    title: str
    shaper: Callable[[Any], dict]


@dataclass(frozen=True)
class SectionSpec:
    kind: ResourceKind
    model: type
    label: str           # singular, used in messages ("link")
    title: str           # used in 404s ("Link")
    shaper: Callable[[Any], dict]
    child: ChildSpec | None = None


WORK_PROJECTS = ChildSpec(
    "projects", WorkProject, "project", "Experience project",
    profile_shape.shape_work_project,
)
PORTFOLIO_IMAGES = ChildSpec(
    "images", PortfolioImage, "image", "Project image",
    profile_shape.shape_portfolio_image,
)

LINKS = SectionSpec(
    ResourceKind.LINKS, ProfileLink, "link", "Link", profile_shape.shape_link,
)
PORTFOLIO = SectionSpec(
    ResourceKind.PORTFOLIO, PortfolioProject, "project", "Portfolio project",
    profile_shape.shape_portfolio, PORTFOLIO_IMAGES,
)
EXPERIENCE = SectionSpec(
    ResourceKind.EXPERIENCE, WorkExperience, "experience", "Work experience",
    profile_shape.shape_experience, WORK_PROJECTS,
)
EDUCATION = SectionSpec(
    ResourceKind.EDUCATION, Education, "education", "Education entry",
    profile_shape.shape_education,
)
ACHIEVEMENTS = SectionSpec(
    ResourceKind.ACHIEVEMENTS, Achievement, "achievement", "Achievement",
    profile_shape.shape_achievement,
)
EXTRACURRICULARS = SectionSpec(
    ResourceKind.EXTRACURRICULARS, Extracurricular, "extracurricular",
    "Extracurricular activity", profile_shape.shape_extracurricular,
)


# --- Field application -------------------------------------------------------

def apply_fields(row, fields: dict[str, Any]) -> None:
    """Copy payload fields onto a row, skipping None for NOT NULL columns."""
    columns = row.__table__.columns
    for key, value in fields.items():
        if key not in columns:
            continue
        if value is None and not columns[key].nullable:
            continue
        setattr(row, key, value)


def _row_fields(payload: BaseModel, partial: bool) -> dict[str, Any]:
    return payload.model_dump(exclude_unset=partial, exclude=CHILD_FIELDS | {"id"})


def _child_fields(item: BaseModel) -> dict[str, Any]:
    return item.model_dump(exclude={"id"})


def plan_children(spec: SectionSpec, row, payload: BaseModel) -> BatchPlan | None:
    """Plan a child sync when the payload carries the child list (row None = new row)."""
    if not spec.child or spec.child.attr not in payload.model_fields_set:
        return None
    items = getattr(payload, spec.child.attr)
    if items is None:
        return None
    current = _children_in_order(spec, row) if row is not None else []
    return plan_batch(
        [c.id for c in current], [item.id for item in items], spec.child.label,
    )


def sync_children(spec: SectionSpec, row, items: list[BaseModel], plan: BatchPlan) -> None:
    """Apply a child plan: update by id, create new, hard-delete the rest."""
    children = getattr(row, spec.child.attr)
    by_id = {c.id: c for c in children}
    for index, child_id, position in plan.updates:
        child = by_id[child_id]
        apply_fields(child, _child_fields(items[index]))
        child.display_order = position
    for child_id in plan.retired:
        children.remove(by_id[child_id])
    for index, position in plan.creates:
        child = spec.child.model(display_order=position)
        apply_fields(child, _child_fields(items[index]))
        children.append(child)


def _new_row(
    spec: SectionSpec, user_id: UUID, payload: BaseModel, position: int,
    children: BatchPlan | None,
):
    row = spec.model(user_id=user_id, display_order=position, is_active=True)
    apply_fields(row, _row_fields(payload, partial=False))
    if children is not None:
        sync_children(spec, row, getattr(payload, spec.child.attr), children)
    return row


# --- Reads -------------------------------------------------------------------

async def list_active(db: AsyncSession, spec: SectionSpec, user_id: UUID) -> list:
    """Active rows in display order."""
    result = await db.execute(
        select(spec.model)
        .where(spec.model.user_id == user_id, spec.model.is_active.is_(True))
        .order_by(spec.model.display_order, spec.model.created_at),
    )
    return list(result.scalars().all())


async def count_active(db: AsyncSession, spec: SectionSpec, user_id: UUID) -> int:
    result = await db.execute(
        select(func.count()).select_from(spec.model)
        .where(spec.model.user_id == user_id, spec.model.is_active.is_(True)),
    )
    return result.scalar_one()


async def get_owned(
    db: AsyncSession, spec: SectionSpec, user_id: UUID, row_id: UUID,
):
    """Active row owned by user_id, or ResourceNotFoundError."""
    result = await db.execute(
        select(spec.model).where(
            spec.model.id == row_id,
            spec.model.user_id == user_id,
            spec.model.is_active.is_(True),
        ),
    )
    row = result.scalar_one_or_none()
    if row is None:
        raise ResourceNotFoundError(spec.title)
    return row


# --- Single-row writes -------------------------------------------------------

async def create_row(
    db: AsyncSession, spec: SectionSpec, user_id: UUID, payload: BaseModel,
):
    result = await db.execute(
        select(func.max(spec.model.display_order)).where(
            spec.model.user_id == user_id, spec.model.is_active.is_(True),
        ),
    )
    row = _new_row(
        spec, user_id, payload, next_display_order([result.scalar()]),
        plan_children(spec, None, payload),
    )
    db.add(row)
    await db.commit()
    logger.info(
        f"Created {spec.label} {row.id}", extra={"user_id": user_id},
    )
    return row


async def update_row(
    db: AsyncSession, spec: SectionSpec, user_id: UUID, row_id: UUID,
    payload: BaseModel,
):
    row = await get_owned(db, spec, user_id, row_id)
    children = plan_children(spec, row, payload)
    apply_fields(row, _row_fields(payload, partial=True))
    if children is not None:
        sync_children(spec, row, getattr(payload, spec.child.attr), children)
    await db.commit()
    return row


async def soft_delete(
    db: AsyncSession, spec: SectionSpec, user_id: UUID, row_id: UUID,
) -> None:
    row = await get_owned(db, spec, user_id, row_id)
    row.is_active = False
    await db.commit()
    logger.info(f"Deleted {spec.label} {row_id}", extra={"user_id": user_id})


# --- Reorder / batch ---------------------------------------------------------

async def reorder(
    db: AsyncSession, spec: SectionSpec, user_id: UUID, requested_ids: list[UUID],
) -> list:
    """Rewrite display_order from requested_ids; unlisted rows follow."""
    rows = await list_active(db, spec, user_id)
    by_id = {row.id: row for row in rows}
    plan = plan_reorder([row.id for row in rows], requested_ids, spec.label)
    for row_id, position in plan:
        by_id[row_id].display_order = position
    await db.commit()
    return sorted(rows, key=lambda r: r.display_order)


async def batch_sync(
    db: AsyncSession, spec: SectionSpec, user_id: UUID, items: list[BaseModel],
) -> list:
    """Make the section match items: update by id, create new, retire the rest."""
    rows = await list_active(db, spec, user_id)
    by_id = {row.id: row for row in rows}
    plan = plan_batch(
        [row.id for row in rows], [item.id for item in items], spec.label,
    )
    child_plans = [plan_children(spec, by_id.get(item.id), item) for item in items]

    for index, row_id, position in plan.updates:
        row = by_id[row_id]
        apply_fields(row, _row_fields(items[index], partial=False))
        if child_plans[index] is not None:
            sync_children(
                spec, row, getattr(items[index], spec.child.attr), child_plans[index],
            )
        row.display_order = position
    for index, position in plan.creates:
        db.add(_new_row(spec, user_id, items[index], position, child_plans[index]))
    for row_id in plan.retired:
        by_id[row_id].is_active = False

    await db.commit()
    logger.info(
        f"Batch synced {spec.kind.value}: {len(plan.updates)} updated, "
        f"{len(plan.creates)} created, {len(plan.retired)} retired",
        extra={"user_id": user_id},
    )
    return await list_active(db, spec, user_id)


# --- Child collections -------------------------------------------------------

def _children_in_order(spec: SectionSpec, parent) -> list:
    return sorted(getattr(parent, spec.child.attr), key=lambda c: c.display_order)


def get_child(spec: SectionSpec, parent, child_id: UUID):
    for child in getattr(parent, spec.child.attr):
        if child.id == child_id:
            return child
    raise ResourceNotFoundError(spec.child.title)


async def add_child(
    db: AsyncSession, spec: SectionSpec, user_id: UUID, parent_id: UUID,
    payload: BaseModel,
):
    parent = await get_owned(db, spec, user_id, parent_id)
    children = getattr(parent, spec.child.attr)
    child = spec.child.model(
        display_order=next_display_order(c.display_order for c in children),
    )
    apply_fields(child, payload.model_dump(exclude={"id"}))
    children.append(child)
    await db.commit()
    return child


async def update_child(
    db: AsyncSession, spec: SectionSpec, user_id: UUID, parent_id: UUID,
    child_id: UUID, payload: BaseModel,
):
    parent = await get_owned(db, spec, user_id, parent_id)
    child = get_child(spec, parent, child_id)
    apply_fields(child, payload.model_dump(exclude_unset=True, exclude={"id"}))
    await db.commit()
    return child


async def delete_child(
    db: AsyncSession, spec: SectionSpec, user_id: UUID, parent_id: UUID,
    child_id: UUID,
) -> None:
    parent = await get_owned(db, spec, user_id, parent_id)
    child = get_child(spec, parent, child_id)
    getattr(parent, spec.child.attr).remove(child)
    await db.commit()


async def reorder_children(
    db: AsyncSession, spec: SectionSpec, user_id: UUID, parent_id: UUID,
    requested_ids: list[UUID],
) -> list:
    parent = await get_owned(db, spec, user_id, parent_id)
    children = _children_in_order(spec, parent)
    by_id = {c.id: c for c in children}
    plan = plan_reorder([c.id for c in children], requested_ids, spec.child.label)
    for child_id, position in plan:
        by_id[child_id].display_order = position
    await db.commit()
    return sorted(children, key=lambda c: c.display_order)
