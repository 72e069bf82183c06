"""Error Hierarchy — every failure BloodBond reports, with its HTTP status.

Invariants:
    - Each error carries code, category, severity and http_status; routes never
      pick a status code themselves
    - 4xx errors describe the caller's input or the record's state; 5xx errors
      describe storage or the payment provider
    - to_response() is the only shape clients see: {"error": {code, message, ...}}
    - Messages name fields and ids, never SQL, stack traces or provider secrets

Design Decisions:
    - ConflictError subclasses keep their own status: terminal-state mutation
      is 403, duplicate keys and unpaid sessions are 409 (frontend contract)
    - ErrorContext.operation is filled by the HTTP handler when the raiser
      left it empty
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """How loudly the failure is logged and shown."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Which layer the failure belongs to."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where and when the error happened; rendered partially in responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    retry_after_ms: int | None = None


class BloodBondError(Exception):
    """Base exception for all BloodBond errors."""

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
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(BloodBondError):
    """Malformed or missing input."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["field"] = self.field
        return response


class NotFoundError(BloodBondError):
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


class ConflictError(BloodBondError):
    """Operation conflicts with current stored state."""
    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        context: ErrorContext | None = None,
        http_status: int = 409,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, http_status,
        )


class TerminalStateError(ConflictError):
    """Mutation attempted on a done/cancelled request."""
    def __init__(self, status: str, context: ErrorContext | None = None):
        super().__init__(
            f"Request is in terminal state '{status}', no further mutation",
            "TERMINAL_STATE", context, 403,
        )
        self.status = status


class PaymentNotCompletedError(ConflictError):
    """Checkout session has not been paid."""
    def __init__(self, payment_status: str | None, context: ErrorContext | None = None):
        super().__init__(
            f"Payment not completed (status: {payment_status or 'unknown'})",
            "PAYMENT_NOT_COMPLETED", context, 409,
        )
        self.payment_status = payment_status


class DuplicateKeyError(ConflictError):
    """Unique key already taken."""
    def __init__(self, key: str, value: str, context: ErrorContext | None = None):
        super().__init__(
            f"{key} '{value}' already exists", "DUPLICATE_KEY", context, 409,
        )
        self.key = key


# ─── Infrastructure Errors (500-level) ──────────────────────────

class UpstreamError(BloodBondError):
    """External payment provider call failed."""
    def __init__(
        self,
        message: str,
        provider_error_type: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            f"Payment provider error ({provider_error_type}): {message}",
            "UPSTREAM_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 502,
        )
        self.provider_error_type = provider_error_type


class InternalError(BloodBondError):
    """Unexpected failure inside the service."""
    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        category: ErrorCategory = ErrorCategory.INTERNAL,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.CRITICAL, context, 500,
        )


class DatabaseError(InternalError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE, context,
        )
        self.operation = operation
