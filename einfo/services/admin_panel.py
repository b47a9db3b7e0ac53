"""Admin Panel: admin sign-in, platform stats, user management and admin creation.

Invariants:
    - Wrong password, unknown email and inactive admin all fail identically
      ("Invalid credentials")
    - User listings are newest first; search covers name, email and username
    - Every state change and every view is written to the activity log by the
      route, in the same transaction as the change
"""

import logging
import math
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.core.domain_types import AdminRole
from einfo.core.errors import AuthenticationError, RequestRejectedError, ResourceNotFoundError
from einfo.core.like_patterns import LIKE_ESCAPE, contains
from einfo.infrastructure.security import hash_password_async, verify_password_async
from einfo.models.admin import Admin
from einfo.models.admin_activity_log import AdminActivityLog
from einfo.models.portfolio_project import PortfolioProject
from einfo.models.profile_link import ProfileLink
from einfo.models.profile_star import ProfileStar
from einfo.models.user import User
from einfo.models.user_profile import UserProfile
from einfo.models.work_experience import WorkExperience
from einfo.schemas.admin import CreateAdmin

logger = logging.getLogger(__name__)


def shape_admin(admin: Admin) -> dict:
    return {
        "id": str(admin.id),
        "email": admin.email,
        "username": admin.username,
        "name": admin.name,
        "role": admin.role,
        "isActive": admin.is_active,
        "createdAt": admin.created_at.isoformat() if admin.created_at else None,
    }


def shape_activity(entry: AdminActivityLog) -> dict:
    return {
        "id": entry.id,
        "adminId": str(entry.admin_id),
        "action": entry.action,
        "targetUserId": str(entry.target_user_id) if entry.target_user_id else None,
        "targetAdminId": str(entry.target_admin_id) if entry.target_admin_id else None,
        "details": entry.details or {},
        "ipAddress": entry.ip_address,
        "userAgent": entry.user_agent,
        "createdAt": entry.created_at.isoformat() if entry.created_at else None,
        "admin": (
            {"name": entry.admin.name, "email": entry.admin.email}
            if entry.admin else None
        ),
    }


def paginate(page: int, limit: int, total: int, total_key: str) -> dict:
    pages = math.ceil(total / limit) if limit else 0
    return {
        "currentPage": page,
        "totalPages": pages,
        total_key: total,
        "hasNext": page < pages,
        "hasPrev": page > 1,
    }


# ─── Sign-in ────────────────────────────────────────────────────

async def authenticate(db: AsyncSession, email: str, password: str) -> Admin:
    result = await db.execute(select(Admin).where(Admin.email == email.lower()))
    admin = result.scalar_one_or_none()
    if admin is None or not admin.is_active:
        raise AuthenticationError("Invalid credentials")
    if not await verify_password_async(password, admin.password_hash):
        logger.warning("Admin login with wrong password", extra={"admin_id": admin.id})
        raise AuthenticationError("Invalid credentials")
    admin.last_login = datetime.now(timezone.utc)
    return admin


# ─── Stats and listings ─────────────────────────────────────────

async def _count(db: AsyncSession, query) -> int:
    result = await db.execute(query)
    return result.scalar_one()


async def dashboard_stats(db: AsyncSession) -> dict:
    total = await _count(db, select(func.count()).select_from(User))
    active = await _count(
        db, select(func.count()).select_from(User).where(User.is_active.is_(True)),
    )
    profiles = await _count(db, select(func.count()).select_from(UserProfile))
    return {
        "totalUsers": total,
        "activeUsers": active,
        "inactiveUsers": total - active,
        "totalProfiles": profiles,
    }


async def recent_activity(db: AsyncSession, limit: int = 10) -> list[dict]:
    result = await db.execute(
        select(AdminActivityLog).order_by(AdminActivityLog.id.desc()).limit(limit),
    )
    return [shape_activity(e) for e in result.scalars().all()]


def _active_count(model):
    return (
        select(func.count()).select_from(model)
        .where(model.user_id == User.id, model.is_active.is_(True))
        .correlate(User)
        .scalar_subquery()
    )


async def list_users(
    db: AsyncSession, page: int, limit: int,
    search: str | None = None, status: str | None = None,
) -> dict:
    conditions = []
    if search:
        pattern = contains(search)
        conditions.append(or_(
            User.name.ilike(pattern, escape=LIKE_ESCAPE),
            User.email.ilike(pattern, escape=LIKE_ESCAPE),
            User.username.ilike(pattern, escape=LIKE_ESCAPE),
        ))
    if status in ("active", "inactive"):
        conditions.append(User.is_active.is_(status == "active"))

    total = await _count(
        db, select(func.count()).select_from(User).where(*conditions),
    )
    star_count = (
        select(func.count()).select_from(ProfileStar)
        .where(ProfileStar.user_id == User.id)
        .correlate(User)
        .scalar_subquery()
    )
    result = await db.execute(
        select(
            User,
            _active_count(ProfileLink).label("links"),
            _active_count(PortfolioProject).label("portfolio"),
            _active_count(WorkExperience).label("experiences"),
            star_count.label("stars"),
        )
        .where(*conditions)
        .order_by(User.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit),
    )
    users = []
    for user, links, portfolio, experiences, stars in result.all():
        profile = user.profile
        users.append({
            "id": str(user.id),
            "name": user.name,
            "email": user.email,
            "username": user.username,
            "isActive": user.is_active,
            "emailVerified": user.email_verified,
            "totalViews": user.total_views,
            "totalClicks": user.total_clicks,
            "createdAt": user.created_at.isoformat() if user.created_at else None,
            "profile": {
                "profileImageUrl": profile.profile_image_url if profile else None,
                "jobTitle": profile.job_title if profile else None,
                "location": profile.location if profile else None,
            },
            "counts": {
                "links": links,
                "portfolio": portfolio,
                "experiences": experiences,
                "receivedStars": stars,
            },
        })
    return {"users": users, "pagination": paginate(page, limit, total, "totalUsers")}


async def get_user_or_404(db: AsyncSession, user_id: UUID) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise ResourceNotFoundError("User")
    return user


async def list_activity(
    db: AsyncSession, page: int, limit: int,
    action: str | None = None, admin_id: UUID | None = None,
) -> dict:
    conditions = []
    if action:
        conditions.append(AdminActivityLog.action == action)
    if admin_id:
        conditions.append(AdminActivityLog.admin_id == admin_id)
    total = await _count(
        db, select(func.count()).select_from(AdminActivityLog).where(*conditions),
    )
    result = await db.execute(
        select(AdminActivityLog)
        .where(*conditions)
        .order_by(AdminActivityLog.id.desc())
        .offset((page - 1) * limit)
        .limit(limit),
    )
    return {
        "logs": [shape_activity(e) for e in result.scalars().all()],
        "pagination": paginate(page, limit, total, "totalLogs"),
    }


# ─── Admin accounts ─────────────────────────────────────────────

async def create_admin(
    db: AsyncSession, body: CreateAdmin, created_by: UUID | None,
) -> Admin:
    """Add (not commit) a new admin; duplicate email or username → 400."""
    existing = await db.execute(
        select(Admin.id).where(
            or_(Admin.email == body.email, Admin.username == body.username),
        ),
    )
    if existing.first() is not None:
        raise RequestRejectedError("Admin with this email or username already exists")
    admin = Admin(
        email=body.email,
        username=body.username,
        name=body.name,
        password_hash=await hash_password_async(body.password),
        role=AdminRole(body.role).value,
        is_active=True,
        created_by_admin_id=created_by,
    )
    db.add(admin)
    await db.flush()
    return admin
