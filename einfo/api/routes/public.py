"""Public Routes: visitor-facing profile view, mail, stars, clicks and search.

Invariants:
    - No route here needs a token
    - Unknown or deactivated usernames → 404 "Profile not found"
    - GET /profile/{username} counts one view; a counter failure never fails the request
    - One star per (profile, visitor IP); a repeat star → 400
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.api.dependencies import get_mailer
from einfo.api.responses import ok
from einfo.config import get_settings
from einfo.core.errors import RequestRejectedError, ResourceNotFoundError
from einfo.infrastructure.database import get_db
from einfo.infrastructure.mailer import SmtpMailer, build_profile_message
from einfo.models.profile_star import ProfileStar
from einfo.models.user import User
from einfo.schemas.public import MessageRequest, StarRequest
from einfo.services import accounts, analytics, profile_aggregate
from einfo.services.profile_search import SearchFilters, parse_skills, search_profiles

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/public", tags=["public"])


async def _public_user(db: AsyncSession, username: str) -> User:
    user = await accounts.get_active_user_by_username(db, username)
    if user is None:
        raise ResourceNotFoundError("Profile")
    return user


@router.get("/profile/{username}")
async def view_public_profile(username: str, db: AsyncSession = Depends(get_db)):
    user = await _public_user(db, username)
    data = await profile_aggregate.public_profile(db, user)
    await analytics.record_profile_view(db, user.id)
    return ok(data, "Profile retrieved successfully")


@router.post("/profile/{username}/message")
async def send_message(
    username: str,
    body: MessageRequest,
    db: AsyncSession = Depends(get_db),
    mailer: SmtpMailer = Depends(get_mailer),
):
    user = await _public_user(db, username)
    settings = get_settings()
    msg = build_profile_message(
        sender_email=body.sender_email,
        recipient_email=user.email,
        message=body.message,
        from_email=settings.from_email,
        from_name=settings.from_name,
        sender_name=body.sender_name,
        site_url=settings.frontend_url,
    )
    await mailer.send(msg)
    logger.info("Profile message sent", extra={"user_id": user.id})
    return ok(message="Message sent successfully")


@router.post("/profile/{username}/star")
async def star_profile(
    username: str,
    request: Request,
    body: StarRequest | None = None,
    db: AsyncSession = Depends(get_db),
):
    user = await _public_user(db, username)
    visitor_ip = (body.visitor_ip if body else None) or (
        request.client.host if request.client else "unknown"
    )

    existing = await db.execute(
        select(ProfileStar.id).where(
            ProfileStar.user_id == user.id, ProfileStar.visitor_ip == visitor_ip,
        ),
    )
    if existing.scalar_one_or_none() is not None:
        raise RequestRejectedError("You have already starred this profile")

    db.add(ProfileStar(user_id=user.id, visitor_ip=visitor_ip))
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise RequestRejectedError("You have already starred this profile")

    star_count = await profile_aggregate.star_count(db, user.id)
    return ok({"starCount": star_count}, "Profile starred successfully")


@router.post("/profile/{username}/click")
async def track_click(username: str, db: AsyncSession = Depends(get_db)):
    user = await _public_user(db, username)
    await analytics.record_click(db, user.id)
    return ok(message="Click tracked successfully")


@router.get("/search")
async def search(
    q: str | None = None,
    skills: str | None = None,
    location: str | None = None,
    job_title: str | None = Query(None, alias="jobTitle"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    filters = SearchFilters(
        q=q, skills=parse_skills(skills), location=location, job_title=job_title,
    )
    data = await search_profiles(db, filters, page, limit)
    return ok(data, "Search results retrieved successfully")
