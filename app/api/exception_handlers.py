"""
Exception handlers for FastAPI application.

This module follows SRP by centralizing all exception handling logic.
Domain exceptions that escape a use case are mapped to HTTP status codes here.
"""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.core.domain.exceptions import (
    BusinessRuleViolationException,
    ConcurrencyException,
    DomainException,
    EntityNotFoundException,
    InvalidOperationException,
    TenantScopeException,
    TransientPersistenceException,
    ValidationException,
)

logger = logging.getLogger(__name__)

# First match wins; subclasses must precede their bases.
DOMAIN_STATUS_CODES: tuple[tuple[type[DomainException], int], ...] = (
    (EntityNotFoundException, status.HTTP_404_NOT_FOUND),
    (ConcurrencyException, status.HTTP_409_CONFLICT),
    (TransientPersistenceException, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ValidationException, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidOperationException, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (BusinessRuleViolationException, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (TenantScopeException, status.HTTP_400_BAD_REQUEST),
)


def status_code_for(exc: DomainException) -> int:
    """HTTP status for a domain exception; 500 when nothing more specific applies."""
    for exc_type, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _validation_errors(errors: list[dict]) -> list[dict]:
    return [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in errors
    ]


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle HTTPException with consistent response format."""
    http_exc = exc if isinstance(exc, HTTPException) else HTTPException(status_code=500, detail=str(exc))
    return JSONResponse(
        status_code=http_exc.status_code,
        content={
            "error": True,
            "message": http_exc.detail,
            "status_code": http_exc.status_code,
        },
        headers=http_exc.headers,
    )


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle request validation errors with detailed error messages."""
    if not isinstance(exc, RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"error": True, "message": str(exc), "status_code": status.HTTP_422_UNPROCESSABLE_ENTITY},
        )

    errors = _validation_errors(exc.errors())
    logger.warning(f"Validation error on {request.url.path}: {errors}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": True,
            "message": "Validation error",
            "details": errors,
            "status_code": status.HTTP_422_UNPROCESSABLE_ENTITY,
        },
    )


async def pydantic_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle Pydantic validation errors."""
    if not isinstance(exc, ValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"error": True, "message": str(exc), "status_code": status.HTTP_422_UNPROCESSABLE_ENTITY},
        )

    errors = _validation_errors(exc.errors())
    logger.warning(f"Pydantic validation error: {errors}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": True,
            "message": "Data validation error",
            "details": errors,
            "status_code": status.HTTP_422_UNPROCESSABLE_ENTITY,
        },
    )


async def domain_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle domain exceptions that escaped a use case boundary."""
    if not isinstance(exc, DomainException):
        return await global_exception_handler(request, exc)

    status_code = status_code_for(exc)
    logger.warning(f"Domain error on {request.method} {request.url.path}: {exc.code} {exc.message}")

    return JSONResponse(
        status_code=status_code,
        content={
            "error": True,
            "code": exc.code,
            "message": exc.message,
            "details": exc.details,
            "status_code": status_code,
        },
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all unhandled exceptions.

    Logs the full exception with traceback and returns a safe error response.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc!s}",
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": True,
            "message": "Internal server error",
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, pydantic_validation_handler)
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("Exception handlers registered")
