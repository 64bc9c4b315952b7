"""
TripPlanner Backend: Request Logging Middleware
=================================================

What:  One access-log line per HTTP request.
How:   Measures the time spent below this middleware and logs method, path,
       status, duration, request ID and client address. 5xx responses are
       logged at ERROR, 4xx at WARNING, the rest at INFO.

Request bodies are never logged; diary entries may hold personal text.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("tripplanner.access")

# Probed every few seconds by container health checks
_QUIET_PATHS = frozenset({"/api/health"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in _QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        method = request.method
        status = response.status_code
        rid = request_id_var.get("")
        client_ip = request.client.host if request.client else "unknown"

        logger.log(
            _level_for(status),
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
