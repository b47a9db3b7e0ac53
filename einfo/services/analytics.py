"""Analytics: view/click counters on the user row.

Invariants:
    - Increments are single atomic UPDATE ... SET n = n + 1 statements
    - A failed increment is logged and rolled back, never raised to the caller
"""

import logging
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.models.user import User

logger = logging.getLogger(__name__)


async def _increment(db: AsyncSession, user_id: UUID, column) -> bool:
    try:
        await db.execute(
            update(User)
            .where(User.id == user_id)
            .values({column: column + 1})
            .execution_options(synchronize_session=False),
        )
        await db.commit()
        return True
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"Failed to increment {column.key}: {e}", extra={"user_id": user_id},
        )
        return False


async def record_profile_view(db: AsyncSession, user_id: UUID) -> bool:
    return await _increment(db, user_id, User.total_views)


async def record_click(db: AsyncSession, user_id: UUID) -> bool:
    return await _increment(db, user_id, User.total_clicks)
