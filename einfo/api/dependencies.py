"""Request Dependencies: bearer-token guards and external-service providers.

Invariants:
    - get_current_user only yields active users holding a "user" token
    - get_current_admin only yields active admins holding an "admin" token
    - Every guard failure is an AuthenticationError (401) or PermissionDeniedError (403)
    - External clients are built from settings here and nowhere else, so tests
      swap them through app.dependency_overrides

Design Decisions:
    - HTTPBearer(auto_error=False): a missing header must produce our own 401
      envelope ("Authentication required"), not FastAPI's default 403
"""

import logging
from functools import lru_cache
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.config import get_settings
from einfo.core.domain_types import AdminRole, TokenType
from einfo.core.errors import AuthenticationError, PermissionDeniedError
from einfo.infrastructure.database import get_db
from einfo.infrastructure.google_identity import GoogleIdentityVerifier
from einfo.infrastructure.mailer import SmtpMailer
from einfo.infrastructure.media_store import CloudinaryMediaStore
from einfo.infrastructure.security import decode_token
from einfo.models.admin import Admin
from einfo.models.user import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _subject(claims: dict, key: str) -> UUID:
    try:
        return UUID(str(claims[key]))
    except (KeyError, ValueError):
        raise AuthenticationError("Invalid token")


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    if credentials is None:
        raise AuthenticationError("Authentication required")
    claims = decode_token(credentials.credentials, TokenType.USER)
    user_id = _subject(claims, "sub")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise AuthenticationError("User not found")
    if not user.is_active:
        raise AuthenticationError("Account has been deactivated")
    return user


async def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Admin:
    if credentials is None:
        raise AuthenticationError("Access denied. No token provided.")
    claims = decode_token(credentials.credentials, TokenType.ADMIN)
    admin_id = _subject(claims, "adminId")

    result = await db.execute(
        select(Admin).where(Admin.id == admin_id, Admin.is_active.is_(True)),
    )
    admin = result.scalar_one_or_none()
    if admin is None:
        raise AuthenticationError("Invalid token or admin not found")
    return admin


async def require_super_admin(admin: Admin = Depends(get_current_admin)) -> Admin:
    if admin.role != AdminRole.SUPER_ADMIN.value:
        logger.warning(
            "Non-super admin attempted a super admin action",
            extra={"admin_id": admin.id},
        )
        raise PermissionDeniedError("Only super admins can create new admins")
    return admin


# ─── External services ──────────────────────────────────────────

@lru_cache
def get_identity_verifier() -> GoogleIdentityVerifier:
    return GoogleIdentityVerifier(get_settings().google_client_id)


@lru_cache
def get_media_store() -> CloudinaryMediaStore:
    settings = get_settings()
    return CloudinaryMediaStore(
        settings.cloudinary_cloud_name,
        settings.cloudinary_api_key,
        settings.cloudinary_api_secret,
    )


@lru_cache
def get_mailer() -> SmtpMailer:
    settings = get_settings()
    return SmtpMailer(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_username,
        password=settings.smtp_password,
        from_email=settings.from_email,
        from_name=settings.from_name,
        timeout=settings.smtp_timeout_seconds,
    )
