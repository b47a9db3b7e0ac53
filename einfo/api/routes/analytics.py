"""Analytics Routes: the owner's counters and profile completeness summary."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.api.dependencies import get_current_user
from einfo.api.responses import ok
from einfo.core.completeness import compute_completeness
from einfo.infrastructure.database import get_db
from einfo.models.user import User
from einfo.services import profile_aggregate, resource_sync

router = APIRouter(prefix="/api/analytics", tags=["analytics"])

_SECTION_COUNTS = {
    "links": resource_sync.LINKS,
    "portfolio": resource_sync.PORTFOLIO,
    "experiences": resource_sync.EXPERIENCE,
    "education": resource_sync.EDUCATION,
    "achievements": resource_sync.ACHIEVEMENTS,
    "extracurriculars": resource_sync.EXTRACURRICULARS,
}


@router.get("/simple")
async def simple_analytics(user: User = Depends(get_current_user)):
    return ok({"totalViews": user.total_views, "totalClicks": user.total_clicks})


@router.get("/profile/summary")
async def profile_summary(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    counts = {
        key: await resource_sync.count_active(db, spec, user.id)
        for key, spec in _SECTION_COUNTS.items()
    }
    stars = await profile_aggregate.star_count(db, user.id)
    return ok({
        "totalViews": user.total_views,
        "totalClicks": user.total_clicks,
        "starCount": stars,
        "completenessScore": compute_completeness(user, user.profile, counts),
        "profileStats": counts,
    })
