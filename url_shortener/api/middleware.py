"""Request id and request/response logging middleware."""

import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Assign a request id (reusing an incoming X-Request-ID) and log each request.

    The id is stored on `request.state.request_id` for handlers and echoed in
    the response headers.
    """

    def __init__(self, app, logger: logging.Logger):
        super().__init__(app)
        self.logger = logger

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        start = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start) * 1000
        self.logger.info(
            "request completed: %s %s status=%d duration=%.2fms request_id=%s",
            request.method, request.url.path, response.status_code, duration_ms, request_id,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
