"""File walker for upload directories.

This module enumerates the regular files under a directory tree so each
one can be mapped to a storage key and uploaded.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from argos_file_manager.exceptions import InvalidInputError, NotFoundError


@dataclass
class WalkResult:
    """Result of walking a directory tree.

    Attributes:
        root: Root directory that was walked.
        files: Regular files found, in walk order.
    """

    root: Path
    files: list[Path] = field(default_factory=list)


class DirectoryWalker:
    """Walk a directory tree and collect its regular files."""

    @staticmethod
    def _raise_walk_error(error: OSError) -> None:
        raise NotFoundError(f"Failed to read files from directory: {error}") from error

    @staticmethod
    def walk(directory: Path | str) -> WalkResult:
        """Walk a directory and collect all regular files.

        Directories are visited top-down with entries sorted by name, so the
        order is stable between runs. Symbolic links are not followed.

        Args:
            directory: Path to the directory to walk.

        Returns:
            WalkResult containing all files.

        Raises:
            NotFoundError: If the tree cannot be read.
        """
        root = Path(directory)
        if not root.is_dir():
            raise NotFoundError(f"Failed to read files from directory: {directory}")

        result = WalkResult(root=root)

        try:
            for current, dirnames, filenames in os.walk(
                root, onerror=DirectoryWalker._raise_walk_error
            ):
                dirnames.sort()
                for filename in sorted(filenames):
                    file_path = Path(current) / filename
                    if file_path.is_symlink() or not file_path.is_file():
                        continue
                    result.files.append(file_path)
        except OSError as exc:
            raise NotFoundError(f"Failed to read files from directory: {exc}") from exc

        return result


def get_files_from_directory(directory: Path | str) -> list[Path]:
    """Return every regular file under ``directory``.

    Raises:
        NotFoundError: If the tree cannot be read.
    """
    return DirectoryWalker.walk(directory).files


def validate_files_exist(files: list[Path]) -> None:
    """Reject an empty file list; an upload must reference at least one file.

    Raises:
        InvalidInputError: If ``files`` is empty.
    """
    if not files:
        raise InvalidInputError("No files found in the directory to upload.")
