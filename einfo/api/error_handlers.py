"""Error Handlers: global exception handlers producing the frontend's error envelope.

Invariants:
    - EInfoError → its http_status + to_response() envelope
    - RequestValidationError → 400 "Validation failed" with per-field errors
    - Unknown routes → 404 envelope naming the path and method
    - RateLimitExceeded → 429
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Registered from main.py through register_error_handlers (keeps main.py thin)
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from einfo.core.errors import EInfoError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_einfo_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_rate_limit_handler(app)
    _register_generic_error_handler(app)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _register_einfo_error_handler(app: FastAPI) -> None:

    @app.exception_handler(EInfoError)
    async def einfo_error_handler(request: Request, exc: EInfoError):
        """Handle all domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"EInfoError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Router-level errors: unknown route, method not allowed."""
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            content = {
                "success": False,
                "message": f"Route {request.url.path} not found",
                "path": request.url.path,
                "method": request.method,
                "timestamp": _now(),
            }
        else:
            content = {
                "success": False,
                "message": str(exc.detail),
                "timestamp": _now(),
            }
        return JSONResponse(
            status_code=exc.status_code, content=content,
            headers=getattr(exc, "headers", None),
        )


def _register_rate_limit_handler(app: FastAPI) -> None:

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        logger.warning(
            f"Rate limit hit on {request.url.path}: {exc.detail}",
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={
                "success": False,
                "message": "Too many requests from this IP, please try again later.",
                "timestamp": _now(),
            },
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Internal server error",
                "timestamp": _now(),
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "success": False,
        "message": "Validation failed",
        "errors": [
            {
                "field": ".".join(str(loc) for loc in e["loc"] if loc != "body"),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    }
