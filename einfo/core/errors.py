"""Error Hierarchy: typed, categorized exceptions for every E-Info failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope the frontend reads
      ({"success": false, "message": ..., "error": {...}})
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with EInfoError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    admin_id: str | None = None
    resource_type: str | None = None
    debug_info: dict[str, Any] | None = None


class EInfoError(Exception):
    """Base exception for all E-Info errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {
            "success": False,
            "message": self.message,
            "error": {
                "code": self.code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            },
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class RequestRejectedError(EInfoError):
    """Request is well-formed JSON but breaks a business rule."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "REQUEST_REJECTED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class ForeignIdsError(EInfoError):
    """Reorder/batch payload references rows the caller does not own."""
    def __init__(
        self, resource_label: str, invalid_ids: list, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Some {resource_label} IDs are invalid or don't belong to you",
            "FOREIGN_IDS", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.invalid_ids = invalid_ids


class DuplicateIdsError(EInfoError):
    """Reorder/batch payload lists the same row twice."""
    def __init__(
        self, resource_label: str, duplicate_ids: list, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Duplicate {resource_label} IDs in request",
            "DUPLICATE_IDS", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.duplicate_ids = duplicate_ids


class UploadRejectedError(EInfoError):
    """Uploaded file failed type, size or decoding checks."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UPLOAD_REJECTED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class AuthenticationError(EInfoError):
    """Missing, invalid or expired credentials."""
    def __init__(self, message: str = "Authentication failed", context: ErrorContext | None = None):
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(EInfoError):
    """Authenticated, but not allowed to perform this action."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PERMISSION_DENIED", ErrorCategory.PERMISSION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(EInfoError):
    """Requested resource does not exist (or is not visible to the caller)."""
    def __init__(self, resource_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type


class ConflictError(EInfoError):
    """Unique value already taken."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(EInfoError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ExternalServiceError(EInfoError):
    """Google, Cloudinary or SMTP call failed."""
    def __init__(self, service: str, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "EXTERNAL_SERVICE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )
        self.service = service
