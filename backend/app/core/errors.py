"""Error Hierarchy — typed, categorized exceptions for all mesa failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400/404) are recoverable; StorageError (500) is critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with MesaError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - StorageError keeps the failed operation as an attribute, never in the message
"""

from dataclasses import dataclass, field
from enum import Enum
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
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    mesa_id: int | None = None
    local: str | None = None
    field_name: str | None = None


class MesaError(Exception):
    """Base exception for all mesa API errors."""

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
                    "mesa_id": self.context.mesa_id,
                    "local": self.context.local,
                    "field": self.context.field_name,
                },
            }
        }


# ─── Domain Errors (400/404) ─────────────────────────────────────

class ValidationError(MesaError):
    """Malformed or missing input field."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_name = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


class NotFoundError(MesaError):
    """Referenced id or search criterion yields no record."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class MesaNotFoundError(NotFoundError):
    """No mesa with the given id."""
    def __init__(self, mesa_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.mesa_id = mesa_id
        super().__init__("Mesa não encontrada", "MESA_NOT_FOUND", ctx)
        self.mesa_id = mesa_id


class LocalNotFoundError(NotFoundError):
    """Location search matched no mesa."""
    def __init__(self, local: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.local = local
        super().__init__(
            "nenhuma mesa encontrada para o local especificado",
            "LOCAL_NOT_FOUND", ctx,
        )
        self.local = local


class StateConflictError(MesaError):
    """Mutation attempted on a deactivated mesa."""
    def __init__(self, mesa_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.mesa_id = mesa_id
        super().__init__(
            "mesa desativada", "MESA_DESATIVADA", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.mesa_id = mesa_id


# ─── Infrastructure Errors (500) ─────────────────────────────────

class StorageError(MesaError):
    """Persistence operation failed. The message carries no driver detail."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "Erro ao acessar o armazenamento de mesas",
            "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
