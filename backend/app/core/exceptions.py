"""
Global exception handlers for the FastAPI application.
Every error leaves the API as an ApiError envelope and is logged.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from typing import List, Optional

from app.schemas.api import ApiError


logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""
    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: Optional[str] = None,
        errors: Optional[List[str]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        self.errors = errors
        super().__init__(self.message)

    @classmethod
    def bad_request(cls, message: str = "Bad Request", **kwargs) -> "AppException":
        return cls(message, status.HTTP_400_BAD_REQUEST, **kwargs)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized", **kwargs) -> "AppException":
        return cls(message, status.HTTP_401_UNAUTHORIZED, **kwargs)

    @classmethod
    def forbidden(cls, message: str = "Forbidden", **kwargs) -> "AppException":
        return cls(message, status.HTTP_403_FORBIDDEN, **kwargs)

    @classmethod
    def not_found(cls, message: str = "Not Found", **kwargs) -> "AppException":
        return cls(message, status.HTTP_404_NOT_FOUND, **kwargs)

    @classmethod
    def conflict(cls, message: str = "Conflict", **kwargs) -> "AppException":
        return cls(message, status.HTTP_409_CONFLICT, **kwargs)

    @classmethod
    def unprocessable(cls, message: str = "Unprocessable Entity", **kwargs) -> "AppException":
        return cls(message, 422, **kwargs)

    @classmethod
    def internal(cls, message: str = "Internal Server Error", **kwargs) -> "AppException":
        return cls(message, status.HTTP_500_INTERNAL_SERVER_ERROR, **kwargs)


def error_response(
    status_code: int,
    message: str,
    code: Optional[str] = None,
    errors: Optional[List[str]] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """Build a JSON response carrying an ApiError body."""
    body = ApiError(message=message, code=code, errors=errors)
    return JSONResponse(status_code=status_code, content=body.to_wire(), headers=headers)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions."""
    logger.error(
        f"Application exception: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "code": exc.code,
        },
    )
    return error_response(exc.status_code, exc.message, code=exc.code, errors=exc.errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )
    return error_response(
        exc.status_code,
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


def _format_validation_errors(errors: list) -> List[str]:
    """Render validation errors as "<loc>: <msg>" strings."""
    formatted = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = str(error.get("msg", "Invalid value"))
        formatted.append(f"{location}: {message}" if location else message)
    return formatted


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    formatted_errors = _format_validation_errors(exc.errors())

    logger.warning(
        f"Validation error: {formatted_errors}",
        extra={
            "path": request.url.path,
            "errors": formatted_errors,
        },
    )
    return error_response(
        422,
        "Validation failed",
        errors=formatted_errors,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        },
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
