"""Profile Routes: the owner's aggregate, profile edits, and the public aggregate.

Invariants:
    - GET /, /me: private aggregate, visibility flags reported but not applied
    - PUT /me is partial; PUT /basic replaces the whole basic block
    - PUT /visibility resets any flag the body leaves out to True
    - Bulk section PUTs go through the batch protocol (ids stay stable)
    - GET /{username} is public and does NOT count a view (see public.py)
    - /me is declared before /{username}
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.api.dependencies import get_current_user
from einfo.api.responses import ok
from einfo.core.errors import ConflictError, RequestRejectedError, ResourceNotFoundError
from einfo.core.profile_shape import (
    VISIBILITY_FLAGS, shape_achievement, shape_education, shape_experience,
    shape_extracurricular, shape_link, shape_portfolio, shape_profile_block,
    shape_visibility,
)
from einfo.core.usernames import check_username, normalize_username
from einfo.infrastructure.database import get_db
from einfo.models.user import User
from einfo.schemas.profile import (
    AccountUpdate, BasicProfileUpdate, InstantMessageUpdate, ProfileAchievements,
    ProfileEducation, ProfileExperiences, ProfileExtracurriculars, ProfileLinks,
    ProfilePortfolio, ProfileUpdate, VisibilityUpdate,
)
from einfo.services import accounts, profile_aggregate, resource_sync

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/profile", tags=["profile"])


def _profile_payload(user: User) -> dict:
    return {
        **shape_profile_block(user, user.profile),
        "visibilitySettings": shape_visibility(user.profile),
    }


@router.get("")
@router.get("/me")
async def get_my_profile(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    data = await profile_aggregate.private_profile(db, user)
    return ok(data, "Profile retrieved successfully")


@router.put("/me")
async def update_profile(
    body: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    fields = body.model_dump(exclude_unset=True)
    name = fields.pop("name", None)
    if name is not None:
        user.name = name
    profile = await profile_aggregate.upsert_profile(db, user)
    resource_sync.apply_fields(profile, fields)
    await db.commit()
    return ok({"profile": _profile_payload(user)}, "Profile updated successfully")


@router.put("/account")
async def update_account(
    body: AccountUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if body.username is not None:
        error = check_username(body.username)
        if error:
            raise RequestRejectedError(error)
        username = normalize_username(body.username)
        if await accounts.username_taken(db, username, exclude_user_id=user.id):
            raise ConflictError("Username already taken")
        user.username = username
    if body.name is not None:
        user.name = body.name
    user_id = user.id
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning("Username claimed concurrently", extra={"user_id": user_id})
        raise ConflictError("Username already taken")
    logger.info("Account updated", extra={"user_id": user.id, "username": user.username})
    return ok(
        {
            "user": {
                "id": str(user.id),
                "email": user.email,
                "username": user.username,
                "name": user.name,
                "avatar": user.avatar_url,
            },
        },
        "Account updated successfully",
    )


@router.put("/instant-message")
async def update_instant_message(
    body: InstantMessageUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    fields = body.model_dump(exclude_unset=True)
    if "instant_message_subject" in fields:
        user.instant_message_subject = fields["instant_message_subject"]
    if "instant_message_body" in fields:
        user.instant_message_body = fields["instant_message_body"]
    await db.commit()
    return ok(
        {
            "instantMessageSubject": user.instant_message_subject,
            "instantMessageBody": user.instant_message_body,
        },
        "Instant message updated successfully",
    )


@router.put("/basic")
async def update_basic_profile(
    body: BasicProfileUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await profile_aggregate.upsert_profile(db, user)
    profile.job_title = body.job_title or ""
    profile.bio = body.bio or ""
    profile.website = body.website or ""
    profile.location = body.location or ""
    profile.profile_image_url = body.profile_image or ""
    profile.resume_url = body.resume_url or ""
    profile.skills = body.skills
    if body.name:
        user.name = body.name
    await db.commit()
    return ok({"profile": _profile_payload(user)}, "Basic profile updated successfully")


@router.put("/visibility")
async def update_visibility(
    body: VisibilityUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await profile_aggregate.upsert_profile(db, user)
    for attr in VISIBILITY_FLAGS.values():
        setattr(profile, attr, getattr(body, attr))
    await db.commit()
    return ok(
        {"visibilitySettings": shape_visibility(profile)},
        "Visibility settings updated successfully",
    )


# ─── Bulk section replace ───────────────────────────────────────

@router.put("/links")
async def replace_links(
    body: ProfileLinks,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.batch_sync(db, resource_sync.LINKS, user.id, body.links)
    return ok({"links": [shape_link(r) for r in rows]}, "Links updated successfully")


@router.put("/experiences")
async def replace_experiences(
    body: ProfileExperiences,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.batch_sync(
        db, resource_sync.EXPERIENCE, user.id, body.experiences,
    )
    return ok(
        {"experiences": [shape_experience(r) for r in rows]},
        "Experiences updated successfully",
    )


@router.put("/portfolio")
async def replace_portfolio(
    body: ProfilePortfolio,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.batch_sync(
        db, resource_sync.PORTFOLIO, user.id, body.portfolio,
    )
    return ok(
        {"portfolio": [shape_portfolio(r) for r in rows]},
        "Portfolio updated successfully",
    )


@router.put("/education")
async def replace_education(
    body: ProfileEducation,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.batch_sync(
        db, resource_sync.EDUCATION, user.id, body.education,
    )
    return ok(
        {"education": [shape_education(r) for r in rows]},
        "Education updated successfully",
    )


@router.put("/achievements")
async def replace_achievements(
    body: ProfileAchievements,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.batch_sync(
        db, resource_sync.ACHIEVEMENTS, user.id, body.achievements,
    )
    return ok(
        {"achievements": [shape_achievement(r) for r in rows]},
        "Achievements updated successfully",
    )


@router.put("/extracurriculars")
async def replace_extracurriculars(
    body: ProfileExtracurriculars,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await resource_sync.batch_sync(
        db, resource_sync.EXTRACURRICULARS, user.id, body.extracurriculars,
    )
    return ok(
        {"extracurriculars": [shape_extracurricular(r) for r in rows]},
        "Extracurricular activities updated successfully",
    )


# ─── Public ─────────────────────────────────────────────────────

@router.get("/{username}")
async def get_public_profile(username: str, db: AsyncSession = Depends(get_db)):
    user = await accounts.get_active_user_by_username(db, username)
    if user is None:
        raise ResourceNotFoundError("Profile")
    data = await profile_aggregate.public_profile(db, user)
    return ok(data, "Profile retrieved successfully")
