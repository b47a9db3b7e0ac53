"""Admin Routes: admin sign-in, dashboard, user management and the activity log.

Invariants:
    - Everything except /login requires an admin token (user tokens are rejected)
    - /create-admin additionally requires the super_admin role
    - Each route that logs activity commits the log entry together with its change
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.api.dependencies import get_current_admin, require_super_admin
from einfo.api.responses import ok
from einfo.config import get_settings
from einfo.core.domain_types import AdminAction
from einfo.infrastructure.database import get_db
from einfo.infrastructure.security import create_admin_token
from einfo.models.admin import Admin
from einfo.schemas.admin import AdminLogin, CreateAdmin, UserStatusUpdate
from einfo.services import admin_panel, profile_aggregate
from einfo.services.admin_activity import record_activity

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/admin", tags=["admin"])


async def _log(
    db: AsyncSession, admin: Admin, action: AdminAction, request: Request, **kwargs,
) -> None:
    await record_activity(
        db, admin.id, action, get_settings().admin_activity_log_cap,
        request=request, **kwargs,
    )


@router.post("/login")
async def admin_login(
    body: AdminLogin, request: Request, db: AsyncSession = Depends(get_db),
):
    admin = await admin_panel.authenticate(db, body.email, body.password)
    await _log(db, admin, AdminAction.LOGIN, request)
    await db.commit()
    return ok(
        {
            "admin": {
                "id": str(admin.id),
                "email": admin.email,
                "name": admin.name,
                "username": admin.username,
                "role": admin.role,
            },
            "token": create_admin_token(admin),
        },
        "Login successful",
    )


@router.post("/logout")
async def admin_logout(
    request: Request,
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    await _log(db, admin, AdminAction.LOGOUT, request)
    await db.commit()
    return ok(message="Logged out successfully")


@router.get("/dashboard")
async def dashboard(
    request: Request,
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    stats = await admin_panel.dashboard_stats(db)
    recent = await admin_panel.recent_activity(db)
    await _log(db, admin, AdminAction.VIEW_DASHBOARD, request)
    await db.commit()
    return ok({"stats": stats, "recentActivities": recent})


@router.get("/users")
async def list_users(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: str | None = Query(None, max_length=100),
    status_filter: str | None = Query(None, alias="status", pattern="^(active|inactive)$"),
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    data = await admin_panel.list_users(db, page, limit, search, status_filter)
    await _log(
        db, admin, AdminAction.VIEW_USERS, request,
        details={
            "page": page, "limit": limit, "search": search,
            "status": status_filter, "resultCount": len(data["users"]),
        },
    )
    await db.commit()
    return ok(data)


@router.get("/users/{user_id}")
async def get_user_details(
    user_id: UUID,
    request: Request,
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    user = await admin_panel.get_user_or_404(db, user_id)
    aggregate = await profile_aggregate.private_profile(db, user)
    aggregate["user"].update({
        "isActive": user.is_active,
        "emailVerified": user.email_verified,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    })
    await _log(
        db, admin, AdminAction.VIEW_USER_DETAILS, request, target_user_id=user.id,
    )
    await db.commit()
    return ok({"user": aggregate})


@router.put("/users/{user_id}/status")
async def update_user_status(
    user_id: UUID,
    body: UserStatusUpdate,
    request: Request,
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    user = await admin_panel.get_user_or_404(db, user_id)
    previous = user.is_active
    user.is_active = body.is_active
    action = AdminAction.ACTIVATE_USER if body.is_active else AdminAction.DEACTIVATE_USER
    await _log(
        db, admin, action, request, target_user_id=user.id,
        details={"previousStatus": previous, "newStatus": body.is_active},
    )
    await db.commit()
    logger.info(
        f"User {'activated' if body.is_active else 'deactivated'}",
        extra={"admin_id": admin.id, "user_id": user.id},
    )
    return ok(
        {
            "user": {
                "id": str(user.id),
                "name": user.name,
                "email": user.email,
                "username": user.username,
                "isActive": user.is_active,
            },
        },
        f"User {'activated' if body.is_active else 'deactivated'} successfully",
    )


@router.post("/create-admin", status_code=status.HTTP_201_CREATED)
async def create_admin(
    body: CreateAdmin,
    request: Request,
    admin: Admin = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    new_admin = await admin_panel.create_admin(db, body, created_by=admin.id)
    await _log(
        db, admin, AdminAction.CREATE_ADMIN, request, target_admin_id=new_admin.id,
        details={"newAdminEmail": new_admin.email, "newAdminRole": new_admin.role},
    )
    await db.commit()
    return ok({"admin": admin_panel.shape_admin(new_admin)}, "Admin created successfully")


@router.get("/activity-logs")
async def activity_logs(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    action: str | None = None,
    admin_id: UUID | None = Query(None, alias="adminId"),
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    data = await admin_panel.list_activity(db, page, limit, action, admin_id)
    return ok(data)
