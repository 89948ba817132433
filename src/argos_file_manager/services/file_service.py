"""File management service.

Assigns project ids to new uploads and delegates storage work to a
``StorageRepository``.
"""

from __future__ import annotations

import uuid
from pathlib import Path

from argos_file_manager.models.upload import UploadedArchive, UploadSummary
from argos_file_manager.repositories.base import StorageRepository

__all__ = ["FileManagerService", "generate_project_id"]


def generate_project_id() -> str:
    """Return a new random project id."""
    return str(uuid.uuid4())


class FileManagerService:
    """Upload, list, and read project files through a storage repository."""

    def __init__(self, storage_repository: StorageRepository) -> None:
        self._storage = storage_repository

    def upload_directory(
        self, local_dir: Path | str, project_id: str | None = None
    ) -> UploadSummary:
        """Upload a local directory, generating a project id when none is given."""
        project_id = project_id if project_id is not None else generate_project_id()
        results = self._storage.upload_directory(project_id, local_dir)
        return UploadSummary(project_id=project_id, upload_results=results)

    def upload_zip_file(
        self, archive: UploadedArchive | None, project_id: str | None = None
    ) -> UploadSummary:
        """Extract and upload a zip archive, generating a project id when none is given."""
        project_id = project_id if project_id is not None else generate_project_id()
        results = self._storage.upload_multipart_directory(project_id, archive)
        return UploadSummary(project_id=project_id, upload_results=results)

    def list_files(self, project_id: str) -> list[str]:
        return self._storage.list_files(project_id)

    def get_file_content(self, project_id: str, file_path: str) -> str:
        return self._storage.get_file_content(project_id, file_path)
