"""Storage key generation for uploaded files."""

from __future__ import annotations

from pathlib import Path


def project_prefix(project_id: str) -> str:
    """Return the ``projects/<id>/`` namespace for a project."""
    return f"projects/{project_id}/"


def generate_key(project_id: str, directory: Path | str, file: Path | str) -> str:
    """Generate the storage key for ``file`` relative to ``directory``.

    The relative part always uses forward slashes, whatever the host separator.

    Args:
        project_id: Project identifier the file belongs to.
        directory: Root directory of the upload, an ancestor of ``file``.
        file: File being uploaded.

    Returns:
        A key of the form ``projects/<project_id>/<relative/path>``.

    Raises:
        ValueError: If ``file`` is not located under ``directory``.
    """
    relative = Path(file).relative_to(Path(directory))
    return project_prefix(project_id) + relative.as_posix()
