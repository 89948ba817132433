"""Utility functions and helpers"""

from argos_file_manager.utils.input_validator import (
    validate_and_resolve_path,
    validate_directory,
    validate_file_path,
    validate_project_id,
    validate_upload_archive,
)
from argos_file_manager.utils.key_generator import generate_key, project_prefix

__all__ = [
    "generate_key",
    "project_prefix",
    "validate_and_resolve_path",
    "validate_directory",
    "validate_file_path",
    "validate_project_id",
    "validate_upload_archive",
]
