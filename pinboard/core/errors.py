"""Error Hierarchy — typed, categorized exceptions for all pinboard failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors are raised before any persistence side effect
    - PersistenceError is never swallowed: it always reaches the caller
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PinboardError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
    - EditWindowExpiredError subclasses ForbiddenError: callers that only care
      about "not allowed" catch one type
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
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    PERSISTENCE = "persistence"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    pin_id: int | None = None
    user_id: str | None = None
    field_name: str | None = None
    debug_info: dict[str, Any] | None = None


class PinboardError(Exception):
    """Base exception for all pinboard errors."""

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
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "pin_id": self.context.pin_id,
                    "field": self.context.field_name,
                },
            }
        }


# ─── Validation Errors (400) ────────────────────────────────────

class PinValidationError(PinboardError):
    """Pin payload failed validation. Nothing is persisted."""
    def __init__(
        self, message: str, code: str, field_name: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field_name = field_name
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.field_name = field_name


class EmptyContentError(PinValidationError):
    """text_content is empty or whitespace only."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Pin text cannot be empty.",
            "EMPTY_CONTENT", "text_content", context,
        )


class ContentTooLongError(PinValidationError):
    """text_content exceeds MAX_TEXT_LENGTH."""
    def __init__(self, max_length: int, context: ErrorContext | None = None):
        super().__init__(
            f"Pin text cannot be longer than {max_length} characters.",
            "CONTENT_TOO_LONG", "text_content", context,
        )


class MalformedUrlError(PinValidationError):
    """An optional link is present but is not an absolute URL, or is too long."""
    def __init__(
        self, field_name: str, value: str,
        reason: str = "must be an absolute URL",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{field_name} {reason}, got '{value[:200]}'",
            "MALFORMED_URL", field_name, context,
        )
        self.value = value


class InvalidDecorationError(PinValidationError):
    """Sticker/color is too long or outside the configured palette."""
    def __init__(
        self, value: str,
        reason: str = "is not an available sticker or color",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"'{value[:50]}' {reason}",
            "INVALID_DECORATION", "sticker_or_color", context,
        )
        self.value = value


# ─── Access Errors (401/403/404) ────────────────────────────────

class UnauthenticatedError(PinboardError):
    """No valid session was presented."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Sign in required",
            "UNAUTHENTICATED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(PinboardError):
    """Mutation attempted by someone other than the owner."""
    def __init__(
        self, message: str = "Only the owner can change this pin",
        code: str = "FORBIDDEN", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class EditWindowExpiredError(ForbiddenError):
    """Mutation attempted after the 24h edit window closed."""
    def __init__(self, pin_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.pin_id = pin_id
        super().__init__(
            "Pins can only be edited or deleted within 24 hours of posting",
            "EDIT_WINDOW_EXPIRED", ctx,
        )


class ResourceNotFoundError(PinboardError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors (5xx) ────────────────────────────────

class PersistenceError(PinboardError):
    """Database operation failed. Surfaced verbatim, never retried."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "PERSISTENCE_ERROR", ErrorCategory.PERSISTENCE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class StorageError(PinboardError):
    """Object storage upload failed."""
    def __init__(self, message: str, path: str, context: ErrorContext | None = None):
        super().__init__(
            f"Upload of '{path}' failed: {message}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.ERROR, context, 502,
        )
        self.path = path
