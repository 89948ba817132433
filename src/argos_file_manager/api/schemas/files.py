"""Pydantic schemas for file manager API responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from argos_file_manager.models.upload import UploadSummary


class UploadResponse(BaseModel):
    """Response schema for directory and zip uploads."""

    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(alias="projectId", description="Project the files were stored under")
    upload_results: dict[str, str] = Field(
        alias="uploadResults", description="Storage key mapped to its upload status"
    )

    @classmethod
    def from_summary(cls, summary: UploadSummary) -> UploadResponse:
        return cls(project_id=summary.project_id, upload_results=summary.upload_results)


class ErrorResponse(BaseModel):
    """Body returned for every handled error."""

    timestamp: datetime
    status: int
    error: str
    message: str | None = None
