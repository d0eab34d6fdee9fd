"""
Application entry point.

Configures logging and error tracking, then builds the app through the factory.
"""

import sentry_sdk

from app.config.settings import get_settings
from app.core.app_factory import create_app
from app.core.shared.logger import configure_logging, get_logger

settings = get_settings()

configure_logging(level=settings.LOG_LEVEL, format_type=settings.LOG_FORMAT)
logger = get_logger(__name__)

# Error tracking is optional
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        send_default_pii=False,
        environment=settings.ENVIRONMENT,
        release=settings.VERSION,
    )
    logger.info("Sentry error tracking initialized")

app = create_app()

if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting application in {settings.ENVIRONMENT} mode")
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8001,
        reload=settings.DEBUG,
    )
