"""
TripPlanner Backend: Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the error scenarios of the API.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-facing messages without leaking internals.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       {"errors": [message]} JSON responses.
Who:   Raised by repositories and services; caught by global handlers.
When:  During request processing when recoverable errors occur.

Exception Hierarchy:
    TripPlannerError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict (duplicate association)
    ├── DatabaseError            → 500 Internal Server Error
    └── ExternalServiceError     → 500 Internal Server Error (Geoapify)
"""

from typing import Any, Dict, Optional


class TripPlannerError(Exception):
    """
    Base exception for all TripPlanner application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TripPlannerError):
    """
    Raised when client input fails validation that pydantic cannot express.

    When:    Malformed UUID in a path segment, unparsable search dates,
             destination without coordinates for a fuel-station lookup.
    HTTP:    400 Bad Request
    """

    status_code = 400

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


class NotFoundError(TripPlannerError):
    """
    Raised when a requested or referenced resource does not exist.

    Repositories return None for missing rows; services convert that into
    this exception. The default message is "<Resource> not found"; pass
    message= to override it (e.g. "Trip or destination not found").

    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(
            message=message or f"{resource[:1].upper()}{resource[1:]} not found",
            context=ctx,
        )


class ConflictError(TripPlannerError):
    """
    Raised when an insert collides with an existing row.

    When:    A trip/destination pair is associated twice.
    HTTP:    409 Conflict
    """

    status_code = 409

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(TripPlannerError):
    """
    Raised when database operations fail unexpectedly.

    The message is the generic per-operation text ("Error creating trip").
    Driver details travel in context and are logged server-side only.

    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ExternalServiceError(TripPlannerError):
    """
    Raised when a third-party HTTP API call fails.

    When:    Geoapify times out, refuses the connection, or answers non-2xx.
    HTTP:    500 Internal Server Error (no retry is attempted)
    """

    def __init__(
        self,
        message: str = "External service request failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
