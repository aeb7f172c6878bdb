"""Error Hierarchy — typed, categorized exceptions for all datafeed guard failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - All errors raised here are caller configuration errors (400-level), never retryable
    - to_response() produces the REST envelope consumed by api/error_handlers.py
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with DatafeedGuardError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - TimeValueParseError is also a ValueError so pydantic validators surface it as field errors
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from datafeed_guard.core.domain_types import ValidationErrorKind


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    datafeed_id: str | None = None
    job_id: str | None = None
    details: dict[str, Any] | None = None


class DatafeedGuardError(Exception):
    """Base exception for all datafeed guard errors."""

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
                    "datafeed_id": self.context.datafeed_id,
                    "job_id": self.context.job_id,
                },
                "details": self.context.details or {},
            }
        }


# ─── Configuration Errors (400-level) ───────────────────────────

class DatafeedJobValidationError(DatafeedGuardError):
    """Datafeed and job configurations are incompatible."""
    def __init__(
        self,
        kind: ValidationErrorKind,
        message: str,
        params: dict[str, Any] | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.details = dict(params or {})
        super().__init__(
            message, kind.value, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.kind = kind
        self.params = dict(params or {})


class AggregationTreeError(DatafeedGuardError):
    """Datafeed aggregation tree is malformed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_AGGREGATIONS", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class TimeValueParseError(DatafeedGuardError, ValueError):
    """Duration setting could not be parsed."""
    def __init__(
        self, value: object, setting_name: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"failed to parse setting [{setting_name}] with value [{value}] "
            f"as a time value: unit is missing or unrecognized",
            "INVALID_TIME_VALUE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.value = value
        self.setting_name = setting_name
