"""
Middleware package for FastAPI application.
"""

from app.api.middleware.logging_middleware import RequestLoggingMiddleware

__all__ = [
    "RequestLoggingMiddleware",
]
