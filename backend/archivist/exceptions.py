"""
Archivist Backend - Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and the asset store; caught by global handlers.
When:  During request processing when recoverable errors occur.

Exception Hierarchy:
    ArchivistError (base)
    ├── ValidationError          → 400 Bad Request (malformed asset id)
    ├── NotFoundError            → 404 Not Found (no matching row)
    ├── InvalidDataError         → 404 Not Found (row exists, content unusable)
    ├── StoreUnavailableError    → 503 Service Unavailable (database unreachable)
    └── DatabaseError            → 500 Internal Server Error

Cache failures have no exception type: the disk cache logs and swallows them.
"""

from typing import Any, Dict, Optional


class ArchivistError(Exception):
    """
    Base exception for all Archivist application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (returned only outside production)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ArchivistError):
    """
    Raised when client input fails validation.

    When:    Asset id is not a non-negative integer, or does not fit a bigint.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Invalid asset ID",
            "details": {"field": "id", "value": "abc"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(ArchivistError):
    """
    Raised when a requested resource does not exist.

    When:    GET /assets/{id} with an id that has no row in the asset table.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"No {resource} found with ID {resource_id}"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class InvalidDataError(ArchivistError):
    """
    Raised when a row exists but cannot be served.

    When:    The asset row has an empty or NULL content or filename column.
    HTTP:    404 Not Found. The record is unusable, not a server fault.
    """

    def __init__(
        self,
        message: str = "Invalid image data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreUnavailableError(ArchivistError):
    """
    Raised when the asset database cannot be reached.

    When:    Connection refused, dropped, or timed out while fetching a row.
    HTTP:    503 Service Unavailable, with a Retry-After header.

    Kept apart from DatabaseError: an outage clears once the database is back,
    a 500 usually points at a bug.
    """

    def __init__(
        self,
        message: str = "Database unavailable",
        retry_after: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if retry_after:
            ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class DatabaseError(ArchivistError):
    """
    Raised when database operations fail unexpectedly.

    When:    A query failed for a reason other than connectivity
             (bad column, permission denied, type mismatch).
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
