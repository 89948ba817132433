"""Data carriers shared between the service and HTTP layers."""

from argos_file_manager.models.upload import UploadedArchive, UploadSummary

__all__ = ["UploadedArchive", "UploadSummary"]
