"""HTTP middleware for request/response logging."""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

# Slow request threshold in milliseconds; `opencode models` alone can take seconds
SLOW_REQUEST_THRESHOLD_MS = 5000
API_PREFIX = "/api/"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with its status and duration.

    Log levels:
    - ERROR: 5xx responses
    - WARNING: 4xx responses and slow requests
    - INFO: successful API requests
    - DEBUG: successful static file and UI shell requests
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        self._log_response(request, response.status_code, duration_ms)
        return response

    def _log_response(self, request: Request, status: int, duration_ms: float) -> None:
        method = request.method
        path = request.url.path

        if status >= 500:
            level, suffix = logging.ERROR, ""
        elif status >= 400:
            level, suffix = logging.WARNING, ""
        elif duration_ms > SLOW_REQUEST_THRESHOLD_MS:
            level, suffix = logging.WARNING, " SLOW"
        elif path.startswith(API_PREFIX):
            level, suffix = logging.INFO, ""
        else:
            level, suffix = logging.DEBUG, ""

        logger.log(level, "%s %s -> %d (%.1fms)%s", method, path, status, duration_ms, suffix)
