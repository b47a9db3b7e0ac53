"""Profile Search: public directory query over active users with a profile.

Invariants:
    - Only active users that have a profile row are searchable
    - q matches name, username, bio or job title, case-insensitively
    - skills matches any of the listed skills (exact element, case-insensitive)
    - %, _ and \\ in any filter match literally
    - Results are ordered by star count descending, then newest user first
"""

import math
from dataclasses import dataclass

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.core.like_patterns import LIKE_ESCAPE, contains
from einfo.core.profile_shape import profile_image_of
from einfo.models.profile_star import ProfileStar
from einfo.models.user import User
from einfo.models.user_profile import UserProfile


@dataclass
class SearchFilters:
    q: str | None = None
    skills: list[str] | None = None
    location: str | None = None
    job_title: str | None = None


def parse_skills(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [s.strip() for s in raw.split(",") if s.strip()]


def _conditions(filters: SearchFilters) -> list:
    conditions = [User.is_active.is_(True)]
    if filters.q:
        pattern = contains(filters.q)
        conditions.append(or_(
            User.name.ilike(pattern, escape=LIKE_ESCAPE),
            User.username.ilike(pattern, escape=LIKE_ESCAPE),
            UserProfile.bio.ilike(pattern, escape=LIKE_ESCAPE),
            UserProfile.job_title.ilike(pattern, escape=LIKE_ESCAPE),
        ))
    if filters.skills:
        skills_text = cast(UserProfile.skills, String)
        conditions.append(or_(
            *(
                skills_text.ilike(contains(f'"{skill}"'), escape=LIKE_ESCAPE)
                for skill in filters.skills
            ),
        ))
    if filters.location:
        conditions.append(UserProfile.location.ilike(
            contains(filters.location), escape=LIKE_ESCAPE,
        ))
    if filters.job_title:
        conditions.append(UserProfile.job_title.ilike(
            contains(filters.job_title), escape=LIKE_ESCAPE,
        ))
    return conditions


def _shape_result(user: User, profile: UserProfile, stars: int) -> dict:
    return {
        "id": str(user.id),
        "name": user.name,
        "username": user.username,
        "jobTitle": profile.job_title or "",
        "bio": profile.bio or "",
        "location": profile.location or "",
        "skills": list(profile.skills or []),
        "profileImage": profile_image_of(user, profile),
        "starCount": stars,
    }


async def search_profiles(
    db: AsyncSession, filters: SearchFilters, page: int, limit: int,
) -> dict:
    """One page of matching profiles plus {page, limit, total, pages}."""
    conditions = _conditions(filters)

    star_counts = (
        select(ProfileStar.user_id, func.count().label("stars"))
        .group_by(ProfileStar.user_id)
        .subquery()
    )
    stars = func.coalesce(star_counts.c.stars, 0)

    total_result = await db.execute(
        select(func.count()).select_from(User)
        .join(UserProfile, UserProfile.user_id == User.id)
        .where(*conditions),
    )
    total = total_result.scalar_one()

    result = await db.execute(
        select(User, UserProfile, stars.label("stars"))
        .join(UserProfile, UserProfile.user_id == User.id)
        .outerjoin(star_counts, star_counts.c.user_id == User.id)
        .where(*conditions)
        .order_by(stars.desc(), User.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit),
    )
    profiles = [_shape_result(u, p, n) for u, p, n in result.all()]
    return {
        "profiles": profiles,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit) if limit else 0,
        },
    }
