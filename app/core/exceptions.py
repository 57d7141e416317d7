"""
Global exception handling for the application.

Every error response has the same body:
``{"error": true, "code": <exception name>, "message": ..., "path": ...}``.
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""

    code: Optional[str] = None

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# Auth

class DuplicatePhoneException(AppError):
    def __init__(self, message: str = "Phone already exists"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class UserNotFoundException(AppError):
    """Raised with 400 on login and 404 on identifier lookups."""

    def __init__(self, message: str = "User not found", status_code: int = status.HTTP_404_NOT_FOUND):
        super().__init__(message, status_code)


class InvalidCredentialsException(AppError):
    def __init__(self, message: str = "Invalid password"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


# Assistant

class ApiKeyMissing(AppError):
    code = "API_KEY_MISSING"

    def __init__(self, message: str = "Gemini API key is not configured"):
        super().__init__(message, status.HTTP_503_SERVICE_UNAVAILABLE)


class InvalidApiKey(AppError):
    code = "INVALID_API_KEY"

    def __init__(self, message: str = "Gemini rejected the configured API key"):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY)


class EmptyResponse(AppError):
    code = "EMPTY_RESPONSE"

    def __init__(self, message: str = "The AI provider returned an empty response"):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY)


class MalformedResponse(AppError):
    code = "MALFORMED_RESPONSE"

    def __init__(self, message: str = "The AI provider returned malformed JSON", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY, details)


def _error_body(request: Request, code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    body = {
        "error": True,
        "code": code,
        "message": message,
        "path": request.url.path,
    }
    if details:
        body["details"] = details
    return body


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.code or exc.__class__.__name__, exc.message, exc.details),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, "HTTPException", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            request,
            "ValidationError",
            message,
            {"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]},
        ),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions (store outages, provider faults)."""
    logger.error("Unhandled error", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(request, "InternalServerError", str(exc) or "Unexpected error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
