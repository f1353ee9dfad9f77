"""Custom exceptions and exception handlers.

This module provides structured exception handling with:
- Custom exception classes for common error scenarios
- The mapping from recipe import failures to HTTP status codes
- FastAPI exception handlers for consistent error responses
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_importer.observability.logging import get_logger
from recipe_importer.services.importing.exceptions import (
    AiFallbackParseError,
    FetchTimeoutError,
    InvalidUrlError,
    RecipeFetchError,
    RecipeImportError,
    ResponseTooLargeError,
    UnrecognizedStructureError,
    UnsupportedProtocolError,
    UpstreamResponseError,
)


if TYPE_CHECKING:
    from fastapi import Request


logger = get_logger(__name__)


class ErrorDetail(BaseModel):
    """Structured error detail for validation errors."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """Structured error response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    error: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class
    for consistent error handling.
    """

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: list[ErrorDetail] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details
        super().__init__(message)


class ServiceUnavailableException(AppException):
    """Service unavailable exception."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error="SERVICE_UNAVAILABLE",
            message=message,
        )


# Most specific classes first; the first isinstance match wins
IMPORT_ERROR_MAPPING: tuple[tuple[type[RecipeImportError], int, str], ...] = (
    (InvalidUrlError, status.HTTP_400_BAD_REQUEST, "INVALID_URL"),
    (UnsupportedProtocolError, status.HTTP_400_BAD_REQUEST, "UNSUPPORTED_PROTOCOL"),
    (FetchTimeoutError, status.HTTP_408_REQUEST_TIMEOUT, "FETCH_TIMEOUT"),
    (ResponseTooLargeError, status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, "RESPONSE_TOO_LARGE"),
    (UpstreamResponseError, status.HTTP_502_BAD_GATEWAY, "UPSTREAM_ERROR"),
    (RecipeFetchError, status.HTTP_502_BAD_GATEWAY, "FETCH_FAILED"),
    (
        UnrecognizedStructureError,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "INVALID_RECIPE_STRUCTURE",
    ),
    (AiFallbackParseError, status.HTTP_422_UNPROCESSABLE_ENTITY, "AI_FALLBACK_PARSE_FAILURE"),
)


def import_error_to_app_exception(exc: RecipeImportError) -> AppException:
    """Translate a recipe import failure into its HTTP representation."""
    for exc_type, status_code, error in IMPORT_ERROR_MAPPING:
        if isinstance(exc, exc_type):
            return AppException(status_code=status_code, error=error, message=str(exc))
    return AppException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error="IMPORT_FAILED",
        message=str(exc),
    )


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state."""
    return getattr(request.state, "request_id", None)


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: list[ErrorDetail] | None = None,
) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=error,
            message=message,
            details=details,
            request_id=_get_request_id(request),
        ).model_dump(by_alias=True),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> ORJSONResponse:
        """Handle custom application exceptions."""
        return _error_response(
            request, exc.status_code, exc.error, exc.message, exc.details
        )

    @app.exception_handler(RecipeImportError)
    async def import_exception_handler(
        request: Request,
        exc: RecipeImportError,
    ) -> ORJSONResponse:
        """Handle recipe import failures."""
        app_exc = import_error_to_app_exception(exc)
        logger.warning(
            "Recipe import failed",
            error=app_exc.error,
            status_code=app_exc.status_code,
            reason=app_exc.message,
        )
        return _error_response(request, app_exc.status_code, app_exc.error, app_exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        """Handle Starlette HTTP exceptions."""
        return _error_response(request, exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        """Handle Pydantic validation errors."""
        details = [
            ErrorDetail(
                code="VALIDATION_ERROR",
                message=error["msg"],
                field=".".join(str(loc) for loc in error["loc"]),
            )
            for error in exc.errors()
        ]
        return _error_response(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "VALIDATION_ERROR",
            "Request validation failed",
            details,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled exception", exc_info=exc)
        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_SERVER_ERROR",
            "An unexpected error occurred",
        )
