"""Error Taxonomy — one error type tagged with an ErrorKind for every API failure mode.

Invariants:
    - Every LotrApiError has a kind; code, http_status and severity derive from it
    - to_response() produces the uniform envelope {success: false, error: {...}}
    - details are client-safe; underlying causes live in ErrorContext/__cause__ only
    - StoreError never reaches a client: the service layer rewraps it as DATABASE

Design Decisions:
    - Tagged kind over a subclass per error: the global handler matches one type
      and reads traits from _KIND_TRAITS
    - Constructor helpers (not_found_error, upstream_error, ...) keep call sites short
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


class ErrorKind(str, Enum):
    """Every failure the API can report to a client."""
    VALIDATION = "validation"
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    UPSTREAM = "upstream"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass(frozen=True)
class KindTraits:
    code: str
    http_status: int
    severity: ErrorSeverity


_KIND_TRAITS: dict[ErrorKind, KindTraits] = {
    ErrorKind.VALIDATION: KindTraits("VALIDATION_ERROR", 400, ErrorSeverity.WARNING),
    ErrorKind.INVALID_ARGUMENT: KindTraits("INVALID_ARGUMENT", 400, ErrorSeverity.WARNING),
    ErrorKind.NOT_FOUND: KindTraits("NOT_FOUND", 404, ErrorSeverity.INFO),
    ErrorKind.RATE_LIMIT: KindTraits("RATE_LIMIT_EXCEEDED", 429, ErrorSeverity.WARNING),
    ErrorKind.UPSTREAM: KindTraits("API_ERROR", 502, ErrorSeverity.ERROR),
    ErrorKind.DATABASE: KindTraits("DATABASE_ERROR", 500, ErrorSeverity.CRITICAL),
    ErrorKind.INTERNAL: KindTraits("INTERNAL_ERROR", 500, ErrorSeverity.CRITICAL),
}


def traits_for(kind: ErrorKind) -> KindTraits:
    return _KIND_TRAITS[kind]


@dataclass
class ErrorContext:
    """Server-side context for logs. Never serialized into responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class LotrApiError(Exception):
    """The single exception type the API layer turns into an error envelope."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: dict[str, Any] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details
        self.context = context or ErrorContext()

    @property
    def code(self) -> str:
        return traits_for(self.kind).code

    @property
    def http_status(self) -> int:
        return traits_for(self.kind).http_status

    @property
    def severity(self) -> ErrorSeverity:
        return traits_for(self.kind).severity

    def to_response(self) -> dict:
        """Convert to the uniform REST error envelope."""
        return error_envelope(self.code, self.message, self.details)

    def __repr__(self) -> str:
        return f"LotrApiError({self.kind.value}, {self.message!r})"


def error_envelope(
    code: str, message: str, details: dict[str, Any] | None = None,
) -> dict:
    """Build {success: false, error: {code, message, details?}}."""
    error: dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details
    return {"success": False, "error": error}


class StoreError(Exception):
    """Store access failure (connectivity, constraint, driver).

    Raised by the store layer with the SQLAlchemy exception chained as
    __cause__. Not part of the client-facing taxonomy.
    """

    def __init__(self, message: str, operation: str):
        super().__init__(f"Store {operation} failed: {message}")
        self.message = message
        self.operation = operation


# ─── Constructors ───────────────────────────────────────────────

def validation_error(
    message: str, details: dict[str, Any] | None = None,
) -> LotrApiError:
    return LotrApiError(ErrorKind.VALIDATION, message, details)


def invalid_argument_error(message: str) -> LotrApiError:
    return LotrApiError(ErrorKind.INVALID_ARGUMENT, message)


def not_found_error(resource_type: str, resource_id: object) -> LotrApiError:
    return LotrApiError(
        ErrorKind.NOT_FOUND, f"{resource_type} not found",
        details={"id": resource_id},
    )


def upstream_error(
    message: str,
    details: dict[str, Any] | None = None,
    context: ErrorContext | None = None,
) -> LotrApiError:
    return LotrApiError(ErrorKind.UPSTREAM, message, details, context)


def database_error(message: str, cause: StoreError) -> LotrApiError:
    """Wrap a StoreError; the cause message stays in the log context only."""
    return LotrApiError(
        ErrorKind.DATABASE, message,
        details={"operation": cause.operation},
        context=ErrorContext(
            operation=cause.operation,
            debug_info={"error": str(cause.__cause__ or cause)},
        ),
    )


def rate_limit_error(limit: str, retry_after: str) -> LotrApiError:
    return LotrApiError(
        ErrorKind.RATE_LIMIT, "Too many requests. Please try again later.",
        details={"retryAfter": retry_after, "limit": limit},
    )
