"""Exception handlers that turn errors into structured JSON responses."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from argos_file_manager.api.schemas.files import ErrorResponse
from argos_file_manager.exceptions import ApiError, ListError

logger = logging.getLogger(__name__)

INTERNAL_SERVER_ERROR = "Internal Server Error"


def _error_response(status_code: int, error: str, message: str | None = None) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(UTC),
        status=status_code,
        error=error,
        message=message,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    """Report an ``ApiError`` with its own status code and message."""
    if isinstance(exc, ListError):
        logger.error("List failure on %s: %s", request.url.path, exc.message)
    else:
        logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return _error_response(exc.status_code, HTTPStatus(exc.status_code).phrase, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report missing or malformed request parameters as invalid input."""
    problems = []
    for error in exc.errors():
        location = error.get("loc", ())
        name = location[-1] if location else "request"
        if error.get("type") == "missing":
            problems.append(f"Missing required parameter: {name}")
        else:
            problems.append(f"Invalid parameter {name}: {error.get('msg', 'invalid value')}")
    message = "; ".join(problems) or "Invalid request."
    logger.warning("Invalid request on %s: %s", request.url.path, message)
    return _error_response(status.HTTP_400_BAD_REQUEST, HTTPStatus.BAD_REQUEST.phrase, message)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Report any other failure as a generic 500 without implementation details."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_SERVER_ERROR,
        "An unexpected error occurred.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
