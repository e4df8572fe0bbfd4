"""Error Hierarchy - typed, categorized exceptions for every album failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Persistence operations raise exactly two storage-tier errors:
      AlbumNotFoundError (zero rows on a key lookup) and StorageFailure (anything else)
    - to_response() only ever returns the fixed public message; driver detail stays
      on the exception for logging

Design Decisions:
    - Single hierarchy with CatalogError base: the FastAPI global handler catches all
    - Handlers branch on the exception class, never on message text
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from album_catalog.core.domain_types import StorageOperation

ALBUM_NOT_FOUND_MESSAGE = "album not found"
BAD_REQUEST_BODY_MESSAGE = "Cannot parse the req body"


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
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
    """Context attached to an error for logs."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    album_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class CatalogError(Exception):
    """Base exception for all album catalog errors."""

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
        """Convert to the client-facing JSON body."""
        return {"message": self.message}

    def log_extra(self) -> dict:
        """Fields for logger.*(extra=...)."""
        return {
            "error_code": self.code,
            "album_id": self.context.album_id,
            "operation": self.context.operation,
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class RequestBodyError(CatalogError):
    """Request body is malformed or misses a required field."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            BAD_REQUEST_BODY_MESSAGE, "INVALID_BODY", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class AlbumNotFoundError(CatalogError):
    """A lookup by id matched zero rows."""
    def __init__(self, album_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.album_id = album_id
        ctx.operation = ctx.operation or StorageOperation.GET.value
        super().__init__(
            ALBUM_NOT_FOUND_MESSAGE, "ALBUM_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO, ctx, 404,
        )
        self.album_id = album_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageFailure(CatalogError):
    """Query, exec or scan failed: connectivity, constraint or malformed statement."""
    def __init__(
        self,
        operation: StorageOperation,
        detail: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation.value
        super().__init__(
            "Error while retrieving data", "STORAGE_FAILURE",
            ErrorCategory.DATABASE, ErrorSeverity.CRITICAL, ctx, 502,
        )
        self.operation = operation
        self.detail = detail

    def __str__(self) -> str:
        return f"Storage {self.operation.value} failed: {self.detail}"
