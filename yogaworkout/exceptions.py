"""
Yoga Workout Backend — Custom Exception Hierarchy
===================================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by validators, repositories and services; caught by global handlers.

Exception Hierarchy:
    YogaWorkoutError (base)
    ├── ValidationError    → 400 Bad Request (missing field, malformed ID)
    ├── NotFoundError      → 404 Not Found (well-formed ID, no record)
    ├── AuthenticationError → 401 Unauthorized (user-scoped call without a valid session)
    ├── FileStorageError   → 500 Internal Server Error (upload could not be written)
    └── DatabaseError      → 500 Internal Server Error (store failure)

A failed session check is NOT raised by the custom plan handler: it returns
it as a normal "please login" result (see services/session_service.py).
AuthenticationError is raised only when a service is handed an
unauthenticated SessionContext.
Blob cleanup failures never leave the blob store; they are logged only.
"""

from typing import Any, Dict, Optional


class YogaWorkoutError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(YogaWorkoutError):
    """
    Raised when client input fails validation.

    When:    Missing required field, malformed ObjectId, bad upload.
    HTTP:    400 Bad Request

    Example response:
        {
            "success": false,
            "error": "validation_error",
            "message": "Enter Stretch Name!",
            "details": {"field": "stretchesName"}
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


class NotFoundError(YogaWorkoutError):
    """
    Raised when a requested record does not exist.

    When:    Update/delete/status change with a well-formed ID that matches nothing.
    HTTP:    404 Not Found

    Motor returns None for missing documents (not an exception); the service
    layer converts None into this exception.
    """

    def __init__(
        self,
        resource: str = "Record",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class AuthenticationError(YogaWorkoutError):
    """
    Raised when user-scoped work is attempted without a logged-in session.

    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Please login first",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class FileStorageError(YogaWorkoutError):
    """
    Raised when an uploaded image cannot be written to the storage volume.

    HTTP:    500 Internal Server Error
    Only uploads raise this; deletes go through best-effort cleanup instead.
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(YogaWorkoutError):
    """
    Raised when a MongoDB operation fails unexpectedly.

    When:    Server unreachable, timeout, write error, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the driver error
    is kept in context and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
