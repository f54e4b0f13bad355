"""
Exception handlers translating flock-commons errors into JSON responses.

Status codes come from ``core.exceptions.http_mapping``; bodies use the
``{"error": {...}}`` shape of ``create_error_response``.
"""
import logging
from typing import Any, Callable, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..core.exceptions import FlockCommonsError, create_error_response, get_http_status_code

logger = logging.getLogger(__name__)

ResponseFormatter = Callable[[FlockCommonsError], Dict[str, Any]]


class ExceptionHandlerRegistry:
    """Installs the library's exception handlers on a FastAPI app."""

    def __init__(
        self,
        response_formatter: Optional[ResponseFormatter] = None,
        is_production: bool = True
    ):
        """
        Args:
            response_formatter: Builds the response body for a library error
            is_production: Replace messages of unexpected errors with a generic one
        """
        self.response_formatter = response_formatter or create_error_response
        self.is_production = is_production

    def _respond(self, exc: FlockCommonsError, status_code: int) -> JSONResponse:
        return JSONResponse(status_code=status_code, content=self.response_formatter(exc))

    def register_handlers(self, app: FastAPI) -> None:

        @app.exception_handler(FlockCommonsError)
        async def handle_library_error(request: Request, exc: FlockCommonsError):
            status_code = get_http_status_code(exc)
            tenant_id = request.headers.get("X-Tenant-ID")
            if status_code >= 500:
                logger.error(
                    f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}",
                    extra={"tenant_id": tenant_id or "-"},
                    exc_info=exc
                )
            else:
                logger.info(
                    f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}",
                    extra={"tenant_id": tenant_id or "-"}
                )
            return self._respond(exc, status_code)

        @app.exception_handler(ValueError)
        async def handle_value_error(request: Request, exc: ValueError):
            error = FlockCommonsError(str(exc), error_code="ValueError")
            return self._respond(error, status.HTTP_400_BAD_REQUEST)

        @app.exception_handler(Exception)
        async def handle_unexpected_error(request: Request, exc: Exception):
            logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
            message = "An unexpected error occurred" if self.is_production else str(exc)
            error = FlockCommonsError(message, error_code="InternalError")
            return self._respond(error, status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(
    app: FastAPI,
    response_formatter: Optional[ResponseFormatter] = None,
    is_production: bool = True
) -> None:
    """Register the flock-commons exception handlers on ``app``."""
    ExceptionHandlerRegistry(response_formatter, is_production).register_handlers(app)
