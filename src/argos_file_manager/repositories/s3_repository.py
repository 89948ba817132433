"""S3-backed storage repository.

Uploads are strictly sequential, one ``put_object`` per local file in walk
order, and the first storage failure aborts the remaining files.
"""

from __future__ import annotations

import logging
from pathlib import Path

from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

from argos_file_manager.exceptions import (
    InvalidInputError,
    ListError,
    NotFoundError,
    UploadError,
)
from argos_file_manager.file_walker import get_files_from_directory, validate_files_exist
from argos_file_manager.models.upload import UPLOADED_STATUS, UploadedArchive
from argos_file_manager.services.archive import clean_up_temp_directory, process_and_extract_zip
from argos_file_manager.utils.input_validator import (
    validate_directory,
    validate_file_path,
    validate_project_id,
    validate_upload_archive,
)
from argos_file_manager.utils.key_generator import generate_key, project_prefix

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error occurred"
_MISSING_KEY_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


def _error_detail(exc: Exception) -> str:
    """Extract the storage service's error message from a client exception."""
    if isinstance(exc, ClientError):
        message = exc.response.get("Error", {}).get("Message")
        return message or UNKNOWN_ERROR
    return str(exc) or UNKNOWN_ERROR


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


class S3Repository:
    """Store project files in a single S3 bucket under ``projects/<id>/``."""

    def __init__(self, client: BaseClient, bucket_name: str) -> None:
        self._client = client
        self._bucket_name = bucket_name

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    def upload_directory(self, project_id: str, local_dir: Path | str) -> dict[str, str]:
        """Upload all files from a local directory under a project prefix.

        Args:
            project_id: Project the files are stored under.
            local_dir: Directory whose files are uploaded.

        Returns:
            Storage key mapped to ``"Uploaded"`` for every file.

        Raises:
            InvalidInputError: Blank project id, bad directory, or no files.
            NotFoundError: If the directory tree cannot be read.
            UploadError: If any put fails; no partial result is returned.
        """
        validate_project_id(project_id)
        directory = validate_directory(local_dir)
        return self._upload_files(project_id, directory)

    def upload_multipart_directory(
        self, project_id: str, archive: UploadedArchive | None
    ) -> dict[str, str]:
        """Extract an uploaded zip archive and upload its files.

        The temporary extraction root is always removed before returning or
        re-raising.
        """
        validate_project_id(project_id)
        validate_upload_archive(archive)

        temp_dir = process_and_extract_zip(archive)
        try:
            results = self._upload_files(project_id, temp_dir)
        except Exception:
            # Re-raise the upload error; a cleanup failure here is only logged.
            try:
                clean_up_temp_directory(temp_dir)
            except InvalidInputError:
                logger.exception("Failed to clean up %s after upload error", temp_dir)
            raise

        clean_up_temp_directory(temp_dir)
        return results

    def _upload_files(self, project_id: str, directory: Path) -> dict[str, str]:
        files = get_files_from_directory(directory)
        validate_files_exist(files)

        logger.info("Uploading %d file(s) for project %s", len(files), project_id)
        results: dict[str, str] = {}
        for file in files:
            key = generate_key(project_id, directory, file)
            self._put_file(key, file)
            results[key] = UPLOADED_STATUS
            logger.debug("Uploaded %s", key)

        logger.info("Uploaded %d file(s) for project %s", len(results), project_id)
        return results

    def _put_file(self, key: str, file: Path) -> None:
        try:
            with file.open("rb") as body:
                self._client.put_object(Bucket=self._bucket_name, Key=key, Body=body)
        except (ClientError, BotoCoreError) as exc:
            logger.warning("Upload of %s failed: %s", key, _error_detail(exc))
            raise UploadError(f"Failed to upload files to S3: {_error_detail(exc)}") from exc
        except OSError as exc:
            raise NotFoundError(f"Failed to read files from directory: {exc}") from exc

    def list_files(self, project_id: str) -> list[str]:
        """List every key stored under the project prefix, in storage order.

        Raises:
            InvalidInputError: If the project id is blank.
            NotFoundError: If no keys exist under the prefix.
            ListError: If the storage listing fails.
        """
        validate_project_id(project_id)
        prefix = project_prefix(project_id)

        keys: list[str] = []
        try:
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self._bucket_name, Prefix=prefix):
                keys.extend(item["Key"] for item in page.get("Contents", []))
        except (ClientError, BotoCoreError) as exc:
            logger.exception("Failed to list %s", prefix)
            raise ListError(f"Failed to list files: {_error_detail(exc)}") from exc

        if not keys:
            raise NotFoundError(f"No files found for project ID: {project_id}")
        return keys

    def get_file_content(self, project_id: str, file_path: str) -> str:
        """Fetch one object under the project prefix and decode it as UTF-8.

        Raises:
            InvalidInputError: Blank project id or file path, or undecodable content.
            NotFoundError: If the key does not exist.
            UploadError: If the storage read fails.
        """
        validate_project_id(project_id)
        validate_file_path(file_path)
        key = project_prefix(project_id) + file_path

        try:
            response = self._client.get_object(Bucket=self._bucket_name, Key=key)
            body = response["Body"]
            try:
                data = body.read()
            finally:
                body.close()
        except ClientError as exc:
            if _error_code(exc) in _MISSING_KEY_CODES:
                raise NotFoundError(f"File not found: {file_path}") from exc
            raise UploadError(f"Failed to retrieve file: {_error_detail(exc)}") from exc
        except BotoCoreError as exc:
            raise UploadError(f"Failed to retrieve file: {_error_detail(exc)}") from exc

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidInputError(f"Error reading file content: {exc}") from exc
