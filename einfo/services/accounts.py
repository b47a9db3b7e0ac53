"""Accounts: Google sign-in, username allocation and user lookup.

Invariants:
    - A Google account maps to exactly one user (google_id unique)
    - New users get an empty profile row with every visibility flag on
    - Returning users keep their chosen name; avatar and email_verified refresh
    - Deactivated users cannot sign in
    - Usernames handed out are lowercase, free at allocation time and pass check_username
"""

import logging
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.core.errors import (
    AuthenticationError, ConflictError, RequestRejectedError,
)
from einfo.core.usernames import (
    check_username, normalize_username, username_candidates, username_from_email,
)
from einfo.infrastructure.google_identity import GoogleIdentity
from einfo.models.user import User
from einfo.models.user_profile import UserProfile

logger = logging.getLogger(__name__)


async def username_taken(
    db: AsyncSession, username: str, exclude_user_id: UUID | None = None,
) -> bool:
    query = select(User.id).where(func.lower(User.username) == username.lower())
    if exclude_user_id is not None:
        query = query.where(User.id != exclude_user_id)
    result = await db.execute(query.limit(1))
    return result.scalar_one_or_none() is not None


async def allocate_username(db: AsyncSession, base: str) -> str:
    """First free candidate derived from base."""
    for candidate in username_candidates(base):
        if not await username_taken(db, candidate):
            return candidate
    raise RuntimeError("username_candidates is unbounded")


async def get_active_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(
        select(User).where(
            User.username == normalize_username(username),
            User.is_active.is_(True),
        ),
    )
    return result.scalar_one_or_none()


async def sign_in_with_google(
    db: AsyncSession, identity: GoogleIdentity, requested_username: str | None,
) -> tuple[User, bool]:
    """Return (user, created) for a verified Google identity."""
    result = await db.execute(
        select(User).where(User.google_id == identity.google_id),
    )
    user = result.scalar_one_or_none()

    if user is not None:
        if not user.is_active:
            raise AuthenticationError("Account has been deactivated")
        user.avatar_url = identity.avatar_url
        user.email_verified = identity.email_verified
        await db.commit()
        return user, False

    if requested_username:
        base = normalize_username(requested_username)
        error = check_username(base)
        if error:
            raise RequestRejectedError(error)
    else:
        base = username_from_email(identity.email)
    username = await allocate_username(db, base)
    error = check_username(username)
    if error:
        raise RequestRejectedError(error)

    user = User(
        email=identity.email,
        username=username,
        name=identity.name,
        google_id=identity.google_id,
        avatar_url=identity.avatar_url,
        email_verified=identity.email_verified,
        is_active=True,
        profile=UserProfile(
            job_title="", bio="", website="", location="", skills=[],
        ),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning(f"Sign-up collided for {identity.email}")
        raise ConflictError("An account with this email already exists")
    logger.info(
        "New user registered",
        extra={"user_id": user.id, "username": user.username},
    )
    return user, True
