"""Storage repositories."""

from argos_file_manager.repositories.base import StorageRepository
from argos_file_manager.repositories.s3_repository import S3Repository

__all__ = ["StorageRepository", "S3Repository"]
