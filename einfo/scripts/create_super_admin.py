"""Create the first super admin. Does nothing once any admin exists.

Usage:
    python -m einfo.scripts.create_super_admin --email admin@example.com \
        --username superadmin --name "Super Administrator"

The password comes from --password or SUPER_ADMIN_PASSWORD.
"""

import argparse
import asyncio
import logging
import os
import sys

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from einfo.config import get_settings
from einfo.core.domain_types import AdminRole
from einfo.db.session import create_session_factory
from einfo.infrastructure.observability import setup_logging
from einfo.models.admin import Admin
from einfo.schemas.admin import CreateAdmin
from einfo.services import admin_panel

logger = logging.getLogger(__name__)


async def create_super_admin(
    session_factory: async_sessionmaker[AsyncSession], body: CreateAdmin,
) -> Admin | None:
    """Insert the super admin, or return None when admins already exist."""
    async with session_factory() as db:
        result = await db.execute(select(func.count()).select_from(Admin))
        if result.scalar_one() > 0:
            logger.warning("Admin users already exist; super admin setup skipped")
            return None
        admin = await admin_panel.create_admin(db, body, created_by=None)
        await db.commit()
        logger.info(f"Super admin created: {admin.email}", extra={"admin_id": admin.id})
        return admin


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--email", default=os.environ.get("SUPER_ADMIN_EMAIL", "admin@example.com"),
    )
    parser.add_argument(
        "--username", default=os.environ.get("SUPER_ADMIN_USERNAME", "superadmin"),
    )
    parser.add_argument(
        "--name", default=os.environ.get("SUPER_ADMIN_NAME", "Super Administrator"),
    )
    parser.add_argument("--password", default=os.environ.get("SUPER_ADMIN_PASSWORD"))
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    setup_logging(settings.log_level, "text")
    args = _parse_args(argv)
    if not args.password:
        logger.error("Set --password or SUPER_ADMIN_PASSWORD")
        return 1
    body = CreateAdmin(
        email=args.email, username=args.username, name=args.name,
        password=args.password, role=AdminRole.SUPER_ADMIN,
    )
    admin = asyncio.run(
        create_super_admin(create_session_factory(settings.database_url), body),
    )
    return 0 if admin is not None else 2


if __name__ == "__main__":
    sys.exit(main())
