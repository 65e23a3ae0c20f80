"""Error Hierarchy — typed, categorized exceptions for every ledger rejection.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are expected rejections, never crashes
    - Infrastructure errors (500-level) are critical and only raised by the shell
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with LedgerError base: LedgerCore recovers every subclass
      and FastAPI's global handler maps the rest to the same envelope
    - ErrorContext as dataclass: rich observability without coupling to logging
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    caller: str | None = None
    sequence: int | None = None
    debug_info: dict[str, Any] | None = None


class LedgerError(Exception):
    """Base exception for all ledger errors."""

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
                    "operation": self.context.operation,
                    "caller": self.context.caller,
                    "sequence": self.context.sequence,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class NotFoundError(LedgerError):
    """Referenced entity does not exist or is inactive."""
    def __init__(
        self, resource_type: str, resource_id: object, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class UnauthorizedError(LedgerError):
    """Caller lacks the capability required for this entity."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, context, 403,
        )


class DuplicateIdentityError(LedgerError):
    """A unique identity field collides with an active organization."""
    def __init__(self, fields: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Identity already registered: {', '.join(fields)}",
            "DUPLICATE_IDENTITY", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.fields = fields


class InvalidInputError(LedgerError):
    """Malformed request field (blank identity, negative number, wrong type)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class InvalidWindowError(LedgerError):
    """Campaign end time is not after its start time."""
    def __init__(self, start_time: int, end_time: int, context: ErrorContext | None = None):
        super().__init__(
            f"Campaign window is empty: end_time ({end_time}) must be after "
            f"start_time ({start_time})",
            "INVALID_WINDOW", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidAmountError(LedgerError):
    """Donation amount must be greater than zero."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Donation amount must be greater than zero",
            "INVALID_AMOUNT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class NotVerifiedError(LedgerError):
    """Organization is not currently verified and active."""
    def __init__(self, organization_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Organization '{organization_id}' is not verified",
            "NOT_VERIFIED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )


class AlreadyVerifiedError(LedgerError):
    """verify called on an organization that is already verified."""
    def __init__(self, organization_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Organization '{organization_id}' is already verified",
            "ALREADY_VERIFIED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.INFO, context, 409,
        )


class AlreadyInactiveError(LedgerError):
    """deactivate called on a campaign that is already inactive."""
    def __init__(self, campaign_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Campaign '{campaign_id}' is already inactive",
            "ALREADY_INACTIVE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.INFO, context, 409,
        )


class CampaignInactiveError(LedgerError):
    """Campaign is manually deactivated or past its end time."""
    def __init__(self, campaign_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Campaign '{campaign_id}' is not accepting donations",
            "CAMPAIGN_INACTIVE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(LedgerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ReplayDivergenceError(LedgerError):
    """A stored audit entry did not reproduce its recorded outcome on replay."""
    def __init__(self, sequence: int, expected: str, actual: str, context: ErrorContext | None = None):
        super().__init__(
            f"Audit entry {sequence} replayed as {actual}, stored as {expected}",
            "REPLAY_DIVERGENCE", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.sequence = sequence
