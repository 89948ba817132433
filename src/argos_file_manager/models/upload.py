"""Data models for directory and archive uploads."""

from __future__ import annotations

from dataclasses import dataclass, field

UPLOADED_STATUS = "Uploaded"


@dataclass(slots=True)
class UploadedArchive:
    """A zip archive received from a caller.

    Attributes:
        filename: Name declared by the caller, untrusted.
        data: Raw archive bytes.
    """

    filename: str | None
    data: bytes


@dataclass(slots=True)
class UploadSummary:
    """Result of uploading one batch of files under a project prefix.

    Attributes:
        project_id: Project the batch was stored under.
        upload_results: Storage key mapped to its upload status.
    """

    project_id: str
    upload_results: dict[str, str] = field(default_factory=dict)
