"""
Application factory for FastAPI.

This module follows SRP by handling only FastAPI application creation and configuration.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.exception_handlers import register_exception_handlers
from app.api.middleware.logging_middleware import RequestLoggingMiddleware
from app.api.router import api_router
from app.config.settings import Settings, get_settings
from app.core.lifecycle import get_lifecycle_manager, lifespan

logger = logging.getLogger(__name__)


class AppFactory:
    """
    Factory for creating and configuring FastAPI applications.

    Each configuration step is handled by a dedicated method.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def create_app(self) -> FastAPI:
        """
        Create and configure the FastAPI application.

        Returns:
            Configured FastAPI application instance.
        """
        app = self._create_base_app()

        self._configure_middleware(app)
        self._configure_exception_handlers(app)
        self._configure_routes(app)
        self._configure_health_endpoint(app)

        logger.info(f"Application created: {self._settings.PROJECT_NAME}")
        return app

    def _create_base_app(self) -> FastAPI:
        return FastAPI(
            title=self._settings.PROJECT_NAME,
            description=self._settings.PROJECT_DESCRIPTION,
            version=self._settings.VERSION,
            docs_url=f"{self._settings.API_V1_STR}/docs" if self._settings.DEBUG else None,
            redoc_url=f"{self._settings.API_V1_STR}/redoc" if self._settings.DEBUG else None,
            lifespan=lifespan,
        )

    def _configure_middleware(self, app: FastAPI) -> None:
        """
        Configure application middleware.

        The last middleware added runs outermost, so CORS goes last.
        """
        app.add_middleware(RequestLoggingMiddleware)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._get_cors_origins(),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        logger.info("Middleware configured")

    def _configure_exception_handlers(self, app: FastAPI) -> None:
        register_exception_handlers(app)

    def _configure_routes(self, app: FastAPI) -> None:
        app.include_router(api_router, prefix=self._settings.API_V1_STR)
        logger.info("Routes configured")

    def _configure_health_endpoint(self, app: FastAPI) -> None:
        @app.get("/health", tags=["health"])
        async def health_check() -> dict[str, str]:
            """Basic liveness and environment information."""
            return {
                "status": "ok",
                "environment": self._settings.ENVIRONMENT,
                "version": self._settings.VERSION,
            }

        @app.get("/health/ready", tags=["health"])
        async def readiness_check() -> JSONResponse:
            """
            Whether the API can serve status changes.

            Only the database gates readiness. Transitions still run
            without Redis; only view invalidation is skipped.
            """
            checks = await get_lifecycle_manager().check_readiness()
            ready = checks["database"]
            return JSONResponse(
                status_code=200 if ready else 503,
                content={"status": "ready" if ready else "unavailable", "checks": checks},
            )

    def _get_cors_origins(self) -> list[str]:
        # Browsers only talk to this API directly in development.
        if self._settings.DEBUG:
            return ["*"]
        return []


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create FastAPI application using the factory.

    Args:
        settings: Optional settings override

    Returns:
        Configured FastAPI application
    """
    factory = AppFactory(settings)
    return factory.create_app()
