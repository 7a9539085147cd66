"""Error Hierarchy — typed, categorized exceptions for the recurring-events service.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are caller mistakes; infrastructure errors (500-level) are not
    - to_response() produces the REST envelope used by the global handlers
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with RecurringError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
    - InvalidWindowError is the only error the occurrence core itself raises;
      degenerate definitions (interval_days <= 0) are tolerated, not raised
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    customer_id: str | None = None
    event_id: str | None = None
    debug_info: dict[str, Any] | None = None


class RecurringError(Exception):
    """Base exception for all recurring-events errors."""

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
                    "customer_id": self.context.customer_id,
                    "event_id": self.context.event_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidWindowError(RecurringError):
    """Query window has start after end."""
    def __init__(self, start: date, end: date, context: ErrorContext | None = None):
        super().__init__(
            f"Window start {start.isoformat()} must be on or before end {end.isoformat()}",
            "INVALID_WINDOW", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.start = start
        self.end = end


class EventValidationError(RecurringError):
    """Event definition violates a lifecycle rule."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(RecurringError):
    """Requested resource does not exist (or belongs to another customer)."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(RecurringError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
