"""
Archivist Backend - Request Logging Middleware
================================================

What:  One access log line per HTTP request, with structured extra fields.
How:   Measures wall time around the downstream handler and logs method,
       path, status, duration, request id, and client IP.
When:  Runs inside RequestIDMiddleware, so the request id is already set.

Log levels:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Not logged: response bodies (asset payloads can be megabytes), auth headers.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from archivist.middleware.request_id import request_id_var

logger = logging.getLogger("archivist.access")

# Probed every few seconds by load balancers
_QUIET_PATHS = {"/", "/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status, and duration for each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in _QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

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
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
