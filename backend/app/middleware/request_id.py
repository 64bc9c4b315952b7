"""
TripPlanner Backend: Request ID Middleware
============================================

What:  Assigns an ID to each incoming request and echoes it in X-Request-ID.
Why:   Lets every log line of one request be correlated, and lets a client
       quote the ID when reporting an error.
How:   Reuses a client-supplied X-Request-ID or generates a short UUID, keeps
       it in a ContextVar for loggers and in request.state for handlers.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local; concurrent requests share the event loop thread
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
