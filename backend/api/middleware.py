"""Request logging middleware."""
from __future__ import annotations

import logging
import time

logger = logging.getLogger("backend.requests")


class RequestLoggingMiddleware:
    """Log method, path, status and elapsed time for every request."""

    def __init__(self, get_response) -> None:
        self.get_response = get_response

    def __call__(self, request):
        logger.info("%s %s started", request.method, request.path)
        start = time.perf_counter()
        response = self.get_response(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.path,
            response.status_code,
            elapsed_ms,
        )
        return response
