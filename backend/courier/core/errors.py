"""Error Hierarchy — typed, categorized exceptions for all Courier failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
      and the HTTP status it maps to at the transport boundary
    - Client errors (400-level) are raised before any persistence or network IO
    - to_response() never contains internal details (stack traces, SQL, driver messages)
    - A remote server's own error status is NOT a CourierError: the proxy forwards it

Design Decisions:
    - Single hierarchy with CourierError base: one global handler renders all of them
    - Proxy errors (NetworkError, ProxyInternalError) override to_response() to keep
      the proxy envelope shape ({success, message, ...}) that clients branch on
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
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    NETWORK = "network"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability; only debug_info stays server-side."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class CourierError(Exception):
    """Base exception for all Courier errors."""

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
        """Convert to standardized REST error response."""
        return {
            "message": self.message,
            "error": {
                "code": self.code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            },
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class InputValidationError(CourierError):
    """Malformed or missing input."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class AuthenticationError(CourierError):
    """Missing, invalid or expired session, or bad credentials."""
    def __init__(self, message: str = "Not authenticated", context: ErrorContext | None = None):
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(CourierError):
    """Authenticated, but not the owner of the resource."""
    def __init__(self, message: str = "Unauthorized access", context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(CourierError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.resource_type = resource_type


class ConflictError(CourierError):
    """Duplicate unique key."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Proxy Errors ───────────────────────────────────────────────

class NetworkError(CourierError):
    """Outbound call never produced an HTTP response."""
    def __init__(
        self, detail: str, network_code: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            "Network error: Unable to reach the server",
            "NETWORK_ERROR", ErrorCategory.NETWORK,
            ErrorSeverity.ERROR, context, 503,
        )
        self.detail = detail
        self.network_code = network_code

    def to_response(self) -> dict:
        return {
            "success": False,
            "message": self.message,
            "error": self.detail,
            "code": self.network_code,
        }


class ProxyInternalError(CourierError):
    """Unexpected failure inside the proxy executor; detail is logged, not returned."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Internal server error while executing request",
            "PROXY_INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )

    def to_response(self) -> dict:
        return {"success": False, "message": self.message}


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(CourierError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
