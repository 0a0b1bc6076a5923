"""
Yoga Workout Backend — Request ID Middleware
=============================================

What:  Tags every request with a short correlation ID.
How:   Takes the client's X-Request-ID header when present, otherwise makes
       one up; stores it in a ContextVar and echoes it on the response.
Who:   Every request. Error bodies (main.py) and log records
       (RequestIDLogFilter) read the same ContextVar.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from yogaworkout.schemas.common import error_response

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again or contact support."

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDLogFilter(logging.Filter):
    """Adds `request_id` to every log record ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("") or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Use the client's X-Request-ID if sent (mobile app ↔ server tracing)
        2. Otherwise generate an 8-character ID
        3. Expose it via request_id_var and request.state.request_id
        4. Return it in the X-Request-ID response header
        5. Answer an exception no handler claimed with a 500 envelope that
           still carries the ID (body and header)
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error("Unexpected error: %s", str(exc), exc_info=True)
            response = error_response(
                500, "internal_server_error", UNEXPECTED_ERROR_MESSAGE, request_id=rid
            )
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
