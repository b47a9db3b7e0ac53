"""Health & Readiness Probes: liveness and readiness endpoints.

Invariants:
    - GET /health and GET /api/public/health always return 200 if the process is up
    - GET /health/ready returns 503 if the database is unreachable
    - None of these count against the rate limit

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from
      the load balancer
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from einfo.api.rate_limit import limiter
from einfo.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


def _liveness() -> dict:
    return {
        "status": "OK",
        "service": "e-info-api",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health", status_code=status.HTTP_200_OK)
@limiter.exempt
async def health_check(request: Request):
    """Basic liveness probe. Returns 200 if the process is up."""
    return _liveness()


@router.get("/api/public/health", status_code=status.HTTP_200_OK)
@limiter.exempt
async def public_health_check(request: Request):
    return {"success": True, **_liveness()}


@router.get("/health/ready")
@limiter.exempt
async def readiness_check(request: Request):
    """Readiness probe, includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
