"""
Yoga Workout Backend — Request Logging Middleware
===================================================

What:  One access-log line per HTTP request: method, path, status, duration.
How:   Times the downstream call and picks the log level from the status
       (5xx ERROR, 4xx WARNING, otherwise INFO). Request bodies are never
       logged; they carry session tokens.
When:  Inside RequestIDMiddleware, so the request ID is already set.

Example line:
    2026-10-19T08:12:03 [WARNING] yogaworkout.access [3f9c2a1b]: DELETE /stretches/abc 400 2.1ms from 10.0.0.7
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("yogaworkout.access")

# Probed every few seconds by Docker/load balancers
QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms from %s",
            request.method,
            path,
            status,
            duration_ms,
            client_ip,
            extra={
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
