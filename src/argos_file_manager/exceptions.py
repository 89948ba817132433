"""Error types raised by the file manager and mapped to HTTP responses."""

from __future__ import annotations

from fastapi import status


class ApiError(Exception):
    """Base class for errors that carry an HTTP status code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(ApiError):
    """Raised when a caller supplies a bad project id, path, or archive."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ApiError):
    """Raised when a directory cannot be read or an object does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class UploadError(ApiError):
    """Raised when the storage layer rejects a put or get."""

    status_code = status.HTTP_400_BAD_REQUEST


class ListError(ApiError):
    """Raised when the storage layer fails to list a project prefix."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
