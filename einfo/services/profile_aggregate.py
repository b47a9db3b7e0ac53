"""Profile Aggregate: loads every section of a user and hands it to the shapers.

Invariants:
    - Each section is loaded with its own query: active rows, display order
    - Star count is a COUNT over profile_stars, never cached
    - upsert_profile always returns a row (creates an empty one when missing)
"""

from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.core.profile_shape import (
    ProfileSections, build_private_profile, build_public_profile,
)
from einfo.models.profile_star import ProfileStar
from einfo.models.user import User
from einfo.models.user_profile import UserProfile
from einfo.services import resource_sync


async def load_sections(db: AsyncSession, user_id: UUID) -> ProfileSections:
    return ProfileSections(
        links=await resource_sync.list_active(db, resource_sync.LINKS, user_id),
        portfolio=await resource_sync.list_active(db, resource_sync.PORTFOLIO, user_id),
        experiences=await resource_sync.list_active(db, resource_sync.EXPERIENCE, user_id),
        education=await resource_sync.list_active(db, resource_sync.EDUCATION, user_id),
        achievements=await resource_sync.list_active(
            db, resource_sync.ACHIEVEMENTS, user_id,
        ),
        extracurriculars=await resource_sync.list_active(
            db, resource_sync.EXTRACURRICULARS, user_id,
        ),
    )


async def star_count(db: AsyncSession, user_id: UUID) -> int:
    result = await db.execute(
        select(func.count()).select_from(ProfileStar)
        .where(ProfileStar.user_id == user_id),
    )
    return result.scalar_one()


async def private_profile(db: AsyncSession, user: User) -> dict:
    sections = await load_sections(db, user.id)
    return build_private_profile(
        user, user.profile, sections, await star_count(db, user.id),
    )


async def public_profile(db: AsyncSession, user: User) -> dict:
    sections = await load_sections(db, user.id)
    return build_public_profile(
        user, user.profile, sections, await star_count(db, user.id),
    )


async def upsert_profile(db: AsyncSession, user: User) -> UserProfile:
    """The user's profile row, created empty (not committed) if missing."""
    if user.profile is None:
        result = await db.execute(
            select(UserProfile).where(UserProfile.user_id == user.id),
        )
        profile = result.scalar_one_or_none()
        if profile is None:
            profile = UserProfile(user_id=user.id, skills=[])
            db.add(profile)
        user.profile = profile
    return user.profile
