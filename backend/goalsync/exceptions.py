"""API error taxonomy and the handlers that render it.

Every error response has the same shape::

    {"message": "Human-readable error message"}

and the HTTP status communicates the category.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(APIError):
    """A required field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class Unauthorized(APIError):
    """Credentials or session token did not check out."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials."


class Forbidden(APIError):
    """Authenticated, but not for the requested account."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized"


class NotFound(APIError):
    """No user for the given email."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class Conflict(APIError):
    """The user already exists."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "User already exists. Please log in."


class InternalError(APIError):
    """Store or hashing failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error. Please try again."


def _error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if location:
        return f"Invalid value for {location}: {first.get('msg', 'invalid')}"
    return first.get("msg", "Invalid request")


def setup_exception_handlers(app: FastAPI, hide_details: bool = False) -> None:
    """Register all exception handlers on the FastAPI application."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.info(
                f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}"
            )
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _error_response(exc.status_code, "Not found", path=request.url.path)
        return _error_response(exc.status_code, str(exc.detail))

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all handler turning uncaught errors into a generic 500."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)

        message = str(exc) or InternalError.default_message
        if hide_details:
            return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            message,
            type=type(exc).__name__,
        )
