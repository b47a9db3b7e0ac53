"""E-Info API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map EInfoError → the {"success": false, ...} envelope
    - CORS and rate limits configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Rate limiting through SlowAPIMiddleware so the default limit covers every
      route without per-route decorators
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware

from einfo.api.error_handlers import register_error_handlers
from einfo.api.rate_limit import limiter
from einfo.api.routes import (
    achievements, admin, analytics, auth, education, experience,
    extracurriculars, health, links, portfolio, profile, public, upload,
)
from einfo.config import get_settings
from einfo.infrastructure import database
from einfo.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if database.db_manager is None:
        database.init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
    logger.info("E-Info API started")
    yield
    logger.info("E-Info API shutting down")
    if database.db_manager is not None:
        await database.db_manager.dispose()
        database.db_manager = None


app = FastAPI(title="E-Info API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(links.router)
app.include_router(portfolio.router)
app.include_router(experience.router)
app.include_router(education.router)
app.include_router(achievements.router)
app.include_router(extracurriculars.router)
app.include_router(public.router)
app.include_router(analytics.router)
app.include_router(upload.router)
app.include_router(admin.router)
