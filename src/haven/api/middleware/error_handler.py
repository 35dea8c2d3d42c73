"""
Error Handler Middleware

Provides consistent error handling and response formatting.
Logs errors with correlation IDs for debugging, and maps breathing
engine errors to client-facing status codes.
"""

import traceback
from uuid import uuid4

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from haven.config.logging_config import get_logger, bind_correlation_id, clear_context
from haven.domain.errors import ClockUnavailable, InvalidConfiguration
from haven.infrastructure.monitoring import capture_exception_with_context

logger = get_logger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Provides:
    - Correlation ID tracking for all requests
    - Consistent error response format
    - Error logging with context
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request with error handling."""

        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid4())
        bind_correlation_id(correlation_id)

        try:
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
            return response

        except Exception as e:
            logger.error(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error_type=type(e).__name__,
                error_message=str(e),
                traceback=traceback.format_exc(),
            )
            capture_exception_with_context(e, extra={"path": request.url.path})

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "Internal server error",
                    "correlation_id": correlation_id,
                    "message": "An unexpected error occurred. Please try again.",
                },
                headers={"X-Correlation-ID": correlation_id},
            )

        finally:
            clear_context()


async def invalid_configuration_handler(request: Request, exc: InvalidConfiguration) -> JSONResponse:
    """Rejected configuration: state unchanged, client must fix input."""
    logger.warning(
        "Invalid breathing configuration",
        path=request.url.path,
        command=exc.command,
        error_message=exc.message,
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "invalid_configuration",
            "command": exc.command,
            "message": exc.message,
        },
    )


async def clock_unavailable_handler(request: Request, exc: ClockUnavailable) -> JSONResponse:
    """Session could not start because no tick source is available."""
    logger.error("Session clock unavailable", path=request.url.path, error_message=exc.message)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "error": "clock_unavailable",
            "command": exc.command,
            "message": exc.message,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach breathing error handlers to an application."""
    app.add_exception_handler(InvalidConfiguration, invalid_configuration_handler)
    app.add_exception_handler(ClockUnavailable, clock_unavailable_handler)
