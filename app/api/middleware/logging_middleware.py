"""
Request logging middleware for FastAPI application.

Logs method, path, tenant, status and timing for every request.
"""

import logging
import time
import uuid
from collections.abc import Callable
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    HTTP middleware for request/response logging.

    Adds a correlation ID to each request and echoes it in the response.
    """

    EXCLUDE_PATHS: tuple[str, ...] = (
        "/health",
        "/favicon.ico",
    )

    def _should_log(self, path: str) -> bool:
        return not any(path.startswith(exclude) for exclude in self.EXCLUDE_PATHS)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())[:8]
        request.state.correlation_id = correlation_id

        if not self._should_log(request.url.path):
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
            return response

        tenant = request.headers.get("X-Tenant-ID", "-")
        start_time = time.perf_counter()
        logger.info(f"[{correlation_id}] --> {request.method} {request.url.path} tenant={tenant}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"[{correlation_id}] <-- {request.method} {request.url.path} ERROR in {duration_ms:.2f}ms: {e}"
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        log_level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            log_level,
            f"[{correlation_id}] <-- {request.method} {request.url.path} "
            f"{response.status_code} in {duration_ms:.2f}ms",
        )

        response.headers["X-Correlation-ID"] = correlation_id
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.2f}"
        return response
