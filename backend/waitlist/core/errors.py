"""Error Hierarchy — typed, categorized exceptions for all waitlist failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (4xx) are permanent for the same input and never retried
    - StorageUnavailableError is the only class a caller may retry
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with WaitlistError base: one FastAPI handler catches all
    - ErrorContext as dataclass: queue/user ids travel with the error into the logs
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    UNAUTHORIZED = "unauthorized"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    queue_id: str | None = None
    user_id: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class WaitlistError(Exception):
    """Base exception for all waitlist errors."""

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

    @property
    def retryable(self) -> bool:
        return False

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
                    "queue_id": self.context.queue_id,
                    "user_id": self.context.user_id,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


def _context(queue_id=None, user_id=None, context=None) -> ErrorContext:
    ctx = context or ErrorContext()
    if queue_id is not None:
        ctx.queue_id = str(queue_id)
    if user_id is not None:
        ctx.user_id = str(user_id)
    return ctx


# ─── Domain Errors (4xx) ────────────────────────────────────────

class QueueNotFoundError(WaitlistError):
    """Queue does not exist (never created, or already deleted)."""
    def __init__(self, queue_id, context: ErrorContext | None = None):
        super().__init__(
            f"Queue '{queue_id}' not found",
            "QUEUE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, _context(queue_id, None, context), 404,
        )


class NotMemberError(WaitlistError):
    """User has no membership entry in the queue."""
    def __init__(self, queue_id, user_id, context: ErrorContext | None = None):
        super().__init__(
            f"User '{user_id}' is not a member of queue '{queue_id}'",
            "NOT_MEMBER", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, _context(queue_id, user_id, context), 404,
        )


class AlreadyMemberError(WaitlistError):
    """User already holds an entry in the queue."""
    def __init__(self, queue_id, user_id, context: ErrorContext | None = None):
        super().__init__(
            f"User '{user_id}' is already a member of queue '{queue_id}'",
            "ALREADY_MEMBER", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, _context(queue_id, user_id, context), 409,
        )


class ForbiddenError(WaitlistError):
    """Caller is not allowed to perform an organizer-only action."""
    def __init__(
        self, action: str, queue_id, user_id, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Only the queue organizer can {action}",
            "FORBIDDEN", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, _context(queue_id, user_id, context), 403,
        )
        self.action = action


class UnauthorizedError(WaitlistError):
    """Identity verification failed."""
    def __init__(self, message: str = "Could not validate credentials",
                 context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.UNAUTHORIZED,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (5xx / integrity) ────────────────────

class StorageUnavailableError(WaitlistError):
    """Storage could not complete the operation. Safe to retry."""
    def __init__(
        self,
        message: str,
        operation: str,
        retry_after_ms: int | None = 1000,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation

    @property
    def retryable(self) -> bool:
        return True


class ConsistencyError(WaitlistError):
    """A storage constraint rejected a write the core did not anticipate."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONSISTENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
