"""
Yoga Workout Backend — Shared Response Envelope
=================================================

What:  The single JSON envelope every endpoint answers with.
How:   Success bodies are ApiResponse[T]; failures are ErrorResponse, produced
       by the exception handlers in main.py (and by the custom plan route
       for a failed session check).

    Success:  {"success": true,  "message": "...", "data": {...}, "error": null}
    Failure:  {"success": false, "error": "not_found", "message": "Week not found",
               "details": {...}, "request_id": "a1b2c3d4"}

The legacy API answered with a different ad hoc shape per endpoint
({message}, {data}, bare documents); clients now read `success` first.
"""

from typing import Generic, Optional, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope; `data` is the endpoint-specific payload."""

    success: bool = Field(default=True, description="Always true for 2xx responses")
    message: str = Field(default="", description="Human-readable outcome")
    data: Optional[T] = Field(default=None, description="Endpoint payload")
    error: Optional[str] = Field(default=None, description="Always null on success")


class ErrorResponse(BaseModel):
    """
    Failure envelope for every 4xx/5xx response.

    Fields:
        error: Machine-readable code (validation_error, not_found, unauthorized, server_error)
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """

    success: bool = Field(default=False)
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer checks."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[dict] = None,
    request_id: Optional[str] = None,
) -> JSONResponse:
    """Render an ErrorResponse; shared by the exception handlers and middleware."""
    body = ErrorResponse(
        error=error,
        message=message,
        details=details or None,
        request_id=request_id,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())
