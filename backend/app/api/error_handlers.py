"""Error Handlers — global exception handlers for the mesas API.

Invariants:
    - MesaError → structured JSON with error code, message, severity
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → 500, never leaks internal details
    - 4xx domain errors log at WARNING; StorageError and unhandled at ERROR

Design Decisions:
    - Three-layer handler: domain (MesaError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py: main only wires, this module renders errors
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.errors import MesaError, ErrorSeverity, StorageError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_mesa_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_mesa_error_handler(app: FastAPI) -> None:
    """Register mesa domain/infrastructure error handler."""

    @app.exception_handler(MesaError)
    async def mesa_error_handler(request: Request, exc: MesaError):
        """Handle all mesa domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "mesa_id": exc.context.mesa_id,
        }
        if isinstance(exc, StorageError):
            logger.error(
                f"StorageError during {exc.operation}", extra=extra,
            )
        else:
            logger.warning(f"MesaError: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.WARNING.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
