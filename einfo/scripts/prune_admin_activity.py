"""Trim the admin activity log down to the newest entries.

Usage:
    python -m einfo.scripts.prune_admin_activity [--keep N]
"""

import argparse
import asyncio
import logging
import sys

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from einfo.config import get_settings
from einfo.db.session import create_session_factory
from einfo.infrastructure.observability import setup_logging
from einfo.services.admin_activity import count_activity, prune_activity_log

logger = logging.getLogger(__name__)


async def prune(
    session_factory: async_sessionmaker[AsyncSession], keep: int,
) -> tuple[int, int]:
    """Returns (rows before, rows deleted)."""
    async with session_factory() as db:
        before = await count_activity(db)
        if before <= keep:
            logger.info(f"No cleanup needed: {before} entries (limit {keep})")
            return before, 0
        deleted = await prune_activity_log(db, keep)
        await db.commit()
        return before, deleted


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    setup_logging(settings.log_level, "text")
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--keep", type=int, default=settings.admin_activity_log_cap)
    args = parser.parse_args(argv)

    before, deleted = asyncio.run(
        prune(create_session_factory(settings.database_url), args.keep),
    )
    logger.info(f"Activity log: {before} before, {deleted} deleted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
