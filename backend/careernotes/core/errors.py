"""Error Hierarchy — typed, categorized exceptions for all Career Notes failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - Enhancer errors never reach the note-creation caller (orchestrator swallows them)

Design Decisions:
    - Single hierarchy with CareerNotesError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    CONFLICT = "conflict"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    note_id: str | None = None
    tone: str | None = None
    export_type: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class CareerNotesError(Exception):
    """Base exception for all Career Notes errors."""

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
                    "note_id": self.context.note_id,
                    "tone": self.context.tone,
                    "export_type": self.context.export_type,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class NoteValidationError(CareerNotesError):
    """Note form failed validation (empty title/description, unknown type)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class InvalidExportTypeError(CareerNotesError):
    """Export type outside cv | linkedin | promotion."""
    def __init__(self, export_type: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.export_type = export_type
        super().__init__(
            f"Invalid export type: '{export_type}'",
            "INVALID_EXPORT_TYPE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.export_type = export_type


class InvalidExportToneError(CareerNotesError):
    """LinkedIn tone outside neutral | inspiring | technical."""
    def __init__(self, tone: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.tone = tone
        super().__init__(
            f"Invalid export tone: '{tone}'",
            "INVALID_EXPORT_TONE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )


class InvalidToneError(CareerNotesError):
    """Tone preference outside professional | friendly | technical."""
    def __init__(self, tone: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.tone = tone
        super().__init__(
            f"Invalid tone preference: '{tone}'",
            "INVALID_TONE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )


class AlreadyInProgressError(CareerNotesError):
    """Regeneration requested while an enhancement is in flight for the same note."""
    def __init__(self, note_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.note_id = note_id
        super().__init__(
            f"Enhancement already in progress for note '{note_id}'",
            "ALREADY_IN_PROGRESS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )


class ResourceNotFoundError(CareerNotesError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class InvalidTransitionError(CareerNotesError):
    """Lifecycle transition not in the table — always a programming error."""
    def __init__(self, current: str, event: str, context: ErrorContext | None = None):
        super().__init__(
            f"No enhancement transition from '{current}' on '{event}'",
            "INVALID_TRANSITION", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(CareerNotesError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class EnhancerUnavailableError(CareerNotesError):
    """Enhancer capability failed to produce text."""
    def __init__(
        self, message: str, code: str = "ENHANCER_UNAVAILABLE",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 503,
        )


class EnhancerTimeoutError(CareerNotesError):
    """Enhancer capability did not answer in time."""
    def __init__(self, timeout_seconds: float, context: ErrorContext | None = None):
        super().__init__(
            f"Enhancer did not respond within {timeout_seconds}s",
            "ENHANCER_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.ERROR, context, 504,
        )
        self.timeout_seconds = timeout_seconds


class AnthropicAPIError(EnhancerUnavailableError):
    """Anthropic API call failed."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            f"Anthropic API error ({api_error_type}): {message}",
            "ANTHROPIC_API_ERROR", ctx,
        )
        self.severity = ErrorSeverity.CRITICAL
        self.api_error_type = api_error_type
