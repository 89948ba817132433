"""Storage repository interface."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from argos_file_manager.models.upload import UploadedArchive


class StorageRepository(Protocol):
    """Operations the file service needs from an object store."""

    def upload_directory(self, project_id: str, local_dir: Path | str) -> dict[str, str]:
        """Upload every file under ``local_dir`` and return key -> status."""
        ...

    def upload_multipart_directory(
        self, project_id: str, archive: UploadedArchive | None
    ) -> dict[str, str]:
        """Extract ``archive`` and upload its files; return key -> status."""
        ...

    def list_files(self, project_id: str) -> list[str]:
        """Return the keys stored under the project prefix."""
        ...

    def get_file_content(self, project_id: str, file_path: str) -> str:
        """Return one object's content decoded as UTF-8."""
        ...
