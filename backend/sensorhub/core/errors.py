"""Error Hierarchy — typed, categorized exceptions for every SensorHub failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors are 400-level; store failures are 500-level
    - to_response() produces the REST envelope used by every non-2xx response
    - Driver details never reach user-facing messages

Design Decisions:
    - Single hierarchy with SensorHubError base: one FastAPI handler catches all
    - InvalidCredentialsError takes no arguments: unknown email and wrong
      password must render the same body
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
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
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Observability context attached to an error (never rendered verbatim)."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    device_id: str | None = None
    debug_info: dict[str, Any] | None = None


class SensorHubError(Exception):
    """Base exception for all SensorHub errors."""

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
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InputValidationError(SensorHubError):
    """A required request field is missing or empty."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class InvalidCredentialsError(SensorHubError):
    """Login failed. Covers both unknown email and wrong password."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid credentials", "INVALID_CREDENTIALS",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
        )


class ResourceNotFoundError(SensorHubError):
    """Requested resource does not exist."""
    def __init__(self, message: str, resource_type: str, context: ErrorContext | None = None):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )
        self.resource_type = resource_type


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SensorHubError):
    """Store operation failed. Message is generic; detail is logged only."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
