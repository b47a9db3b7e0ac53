"""Admin Activity Log: append-and-prune audit trail.

Invariants:
    - record_activity adds one row, then deletes everything but the newest `cap` rows
    - Both statements run in the caller's transaction; the caller commits
    - "Newest" is decided by the integer id, which only grows
"""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from fastapi import Request
from sqlalchemy import delete, select, func
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.core.domain_types import AdminAction
from einfo.models.admin_activity_log import AdminActivityLog

logger = logging.getLogger(__name__)


async def prune_activity_log(db: AsyncSession, cap: int) -> int:
    """Delete all but the newest `cap` rows. Returns rows deleted."""
    keep = select(AdminActivityLog.id).order_by(AdminActivityLog.id.desc()).limit(cap)
    result = await db.execute(
        delete(AdminActivityLog)
        .where(AdminActivityLog.id.not_in(keep))
        .execution_options(synchronize_session=False),
    )
    deleted = result.rowcount or 0
    if deleted:
        logger.info(f"Pruned {deleted} admin activity rows (kept {cap})")
    return deleted


async def record_activity(
    db: AsyncSession,
    admin_id: UUID,
    action: AdminAction,
    cap: int,
    request: Request | None = None,
    target_user_id: UUID | None = None,
    target_admin_id: UUID | None = None,
    details: dict[str, Any] | None = None,
) -> AdminActivityLog:
    entry = AdminActivityLog(
        admin_id=admin_id,
        action=action.value,
        target_user_id=target_user_id,
        target_admin_id=target_admin_id,
        details={**(details or {}), "timestamp": datetime.now(timezone.utc).isoformat()},
        ip_address=request.client.host if request and request.client else None,
        user_agent=(request.headers.get("user-agent") or "")[:500] if request else None,
    )
    db.add(entry)
    await db.flush()
    await prune_activity_log(db, cap)
    logger.info(
        f"Admin activity {action.value}",
        extra={"admin_id": admin_id, "action": action.value},
    )
    return entry


async def count_activity(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(AdminActivityLog))
    return result.scalar_one()
