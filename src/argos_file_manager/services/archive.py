"""Zip archive staging and extraction.

Uploaded archives are untrusted. Every entry is validated against the
extraction root before any of its bytes are written, and the extraction
root is a fresh owner-only temporary directory per request.
"""

from __future__ import annotations

import logging
import re
import shutil
import tempfile
from pathlib import Path
from zipfile import BadZipFile, ZipFile

from argos_file_manager.exceptions import InvalidInputError
from argos_file_manager.models.upload import UploadedArchive
from argos_file_manager.utils.input_validator import validate_and_resolve_path

logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = "unpacked-zip"
DEFAULT_ARCHIVE_NAME = "uploaded.zip"
_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_COPY_CHUNK_SIZE = 64 * 1024


def sanitize_file_name(filename: str) -> str:
    """Replace every character outside ``[A-Za-z0-9._-]`` with an underscore."""
    return _UNSAFE_FILENAME_CHARS.sub("_", filename)


def extract_zip(zip_path: Path, target_dir: Path, *, protected: Path | None = None) -> None:
    """Extract a zip archive into ``target_dir`` entry by entry.

    Entries are processed in archive order. Directory entries are created with
    their parents; file entries overwrite whatever is at the destination. There
    is no rollback: a failure leaves a partial extraction for the caller to
    clean up.

    Args:
        zip_path: Archive to read.
        target_dir: Extraction root.
        protected: Path that no entry may overwrite, such as the staged
            archive itself.

    Raises:
        InvalidInputError: If the archive is unreadable or an entry escapes
            ``target_dir`` or is a symbolic link.
    """
    protected_path = protected.resolve() if protected is not None else None
    try:
        with ZipFile(zip_path) as archive:
            for entry in archive.infolist():
                destination = validate_and_resolve_path(entry, target_dir)
                if protected_path is not None and destination == protected_path:
                    raise InvalidInputError(
                        f"ZIP entry overwrites the uploaded archive: {entry.filename}"
                    )

                if entry.is_dir():
                    destination.mkdir(parents=True, exist_ok=True)
                    continue

                destination.parent.mkdir(parents=True, exist_ok=True)
                with archive.open(entry) as source, destination.open("wb") as sink:
                    shutil.copyfileobj(source, sink, _COPY_CHUNK_SIZE)
    except (BadZipFile, OSError) as exc:
        raise InvalidInputError(f"Error extracting ZIP file: {exc}") from exc


def create_extraction_root() -> Path:
    """Create a fresh temporary directory readable only by its owner."""
    temp_dir = Path(tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX))
    temp_dir.chmod(0o700)
    return temp_dir


def process_and_extract_zip(archive: UploadedArchive) -> Path:
    """Stage an uploaded archive in a new temp directory and extract it there.

    The archive is written under its sanitized name, extracted, and then
    removed so only the extracted files remain for walking. On failure the
    temp directory is removed before the error propagates.

    Returns:
        The temp directory holding the extracted files.

    Raises:
        InvalidInputError: If the archive cannot be written or extracted.
    """
    temp_dir = create_extraction_root()
    try:
        archive_name = sanitize_file_name(archive.filename or DEFAULT_ARCHIVE_NAME)
        if archive_name in {".", ".."}:
            archive_name = DEFAULT_ARCHIVE_NAME
        staged_path = temp_dir / archive_name
        staged_path.write_bytes(archive.data)

        extract_zip(staged_path, temp_dir, protected=staged_path)
        staged_path.unlink()
    except OSError as exc:
        clean_up_temp_directory(temp_dir)
        raise InvalidInputError(f"Failed to process ZIP file: {exc}") from exc
    except InvalidInputError:
        clean_up_temp_directory(temp_dir)
        raise

    logger.debug("Extracted %s into %s", archive_name, temp_dir)
    return temp_dir


def clean_up_temp_directory(temp_dir: Path | None) -> None:
    """Recursively delete a temp directory; ``None`` is a no-op.

    Raises:
        InvalidInputError: If the directory cannot be removed.
    """
    if temp_dir is None:
        return
    try:
        shutil.rmtree(temp_dir)
    except FileNotFoundError:
        return
    except OSError as exc:
        raise InvalidInputError(f"Failed to clean up temporary files: {exc}") from exc
