"""Input validation for project ids, local paths, and zip entries."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from zipfile import ZipInfo

from argos_file_manager.exceptions import InvalidInputError
from argos_file_manager.models.upload import UploadedArchive

logger = logging.getLogger(__name__)


def validate_project_id(project_id: str | None) -> None:
    """Reject a missing or blank project id.

    Raises:
        InvalidInputError: If the project id is None, empty or whitespace only.
    """
    if project_id is None or not project_id.strip():
        raise InvalidInputError("Project ID cannot be null or empty.")


def validate_directory(local_dir: Path | str | None) -> Path:
    """Validate a local directory path and return it as a ``Path``.

    Raises:
        InvalidInputError: If the path does not exist or is not a directory.
    """
    if local_dir is None or not str(local_dir).strip():
        raise InvalidInputError(f"Invalid local directory: {local_dir}")
    directory = Path(local_dir)
    if not directory.exists() or not directory.is_dir():
        raise InvalidInputError(f"Invalid local directory: {local_dir}")
    return directory


def validate_file_path(file_path: str | None) -> None:
    """Reject a missing or blank file path.

    Raises:
        InvalidInputError: If the file path is None, empty or whitespace only.
    """
    if file_path is None or not file_path.strip():
        raise InvalidInputError("File path cannot be null or empty.")


def validate_upload_archive(archive: UploadedArchive | None) -> None:
    """Reject a missing or empty uploaded archive.

    Raises:
        InvalidInputError: If the archive is None or carries no bytes.
    """
    if archive is None:
        raise InvalidInputError("Uploaded ZIP file is null.")
    if not archive.data:
        raise InvalidInputError("Uploaded ZIP file is null or empty.")


def is_symlink_entry(entry: ZipInfo) -> bool:
    """Return True when the entry's unix mode bits mark it as a symbolic link."""
    mode = entry.external_attr >> 16
    return stat.S_ISLNK(mode)


def validate_and_resolve_path(entry: ZipInfo, target_dir: Path) -> Path:
    """Resolve a zip entry's destination and check it stays inside ``target_dir``.

    The destination is normalized and must still be located under the resolved
    extraction root. Entries that are symbolic links, or whose destination is
    already a symbolic link, are rejected. This runs before any bytes are written.

    Args:
        entry: Zip entry about to be extracted.
        target_dir: Extraction root.

    Returns:
        The normalized destination path.

    Raises:
        InvalidInputError: On a directory traversal attempt or a symbolic link.
    """
    root = target_dir.resolve()
    destination = Path(os.path.normpath(root / entry.filename))

    if not destination.is_relative_to(root) or (destination == root and not entry.is_dir()):
        logger.warning("Rejected zip entry outside extraction root: %s", entry.filename)
        raise InvalidInputError(f"Invalid ZIP entry: {entry.filename}")
    if is_symlink_entry(entry) or destination.is_symlink():
        logger.warning("Rejected symbolic link zip entry: %s", entry.filename)
        raise InvalidInputError(f"ZIP entry contains a symbolic link: {entry.filename}")

    return destination
