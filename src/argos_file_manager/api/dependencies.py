"""Shared dependencies for API routes."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from argos_file_manager.config import Settings, create_s3_client, get_settings
from argos_file_manager.repositories.base import StorageRepository
from argos_file_manager.repositories.s3_repository import S3Repository
from argos_file_manager.services.file_service import FileManagerService


@lru_cache(maxsize=1)
def _build_s3_repository(settings: Settings) -> S3Repository:
    return S3Repository(create_s3_client(settings), settings.require_bucket_name())


def get_storage_repository(
    settings: Annotated[Settings, Depends(get_settings)],
) -> StorageRepository:
    """Return the S3 repository for the configured bucket.

    The client is built once per settings instance and shared by every request.

    Raises:
        RuntimeError: If no bucket name is configured.
    """
    return _build_s3_repository(settings)


def get_file_service(
    storage: Annotated[StorageRepository, Depends(get_storage_repository)],
) -> FileManagerService:
    """Return a file service bound to the request's storage repository."""
    return FileManagerService(storage)
