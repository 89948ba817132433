"""File manager routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from fastapi.responses import PlainTextResponse

from argos_file_manager.api.dependencies import get_file_service
from argos_file_manager.api.schemas.files import ErrorResponse, UploadResponse
from argos_file_manager.models.upload import UploadedArchive
from argos_file_manager.services.file_service import FileManagerService

router = APIRouter(prefix="/fileManager", tags=["files"])

FileService = Annotated[FileManagerService, Depends(get_file_service)]

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input or storage failure"},
    404: {"model": ErrorResponse, "description": "Directory or object not found"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}


@router.post(
    "/upload",
    response_model=UploadResponse,
    summary="Upload a local directory",
    description=(
        "Upload every regular file under a server-local directory to "
        "projects/<projectId>/. A project id is generated when none is given."
    ),
    responses=_ERROR_RESPONSES,
)
def upload_directory(
    service: FileService,
    local_dir: Annotated[str, Query(alias="localDir", description="Local directory path")],
    project_id: Annotated[
        str | None, Query(alias="projectId", description="Optional project id")
    ] = None,
) -> UploadResponse:
    summary = service.upload_directory(local_dir, project_id=project_id)
    return UploadResponse.from_summary(summary)


@router.post(
    "/upload-zip",
    response_model=UploadResponse,
    summary="Upload a zip archive",
    description=(
        "Extract a zip archive into a private temporary directory and upload its "
        "files to projects/<projectId>/. A project id is generated when none is given."
    ),
    responses=_ERROR_RESPONSES,
)
async def upload_zip(
    request: Request,
    service: FileService,
    file: Annotated[UploadFile, File(description="ZIP archive containing project files")],
    project_id: Annotated[
        str | None, Form(alias="projectId", description="Optional project id")
    ] = None,
) -> UploadResponse:
    # An empty form field arrives as the default; the raw form keeps "" distinct from absent.
    raw_project_id = (await request.form()).get("projectId")
    if raw_project_id is not None:
        project_id = str(raw_project_id)

    archive = UploadedArchive(filename=file.filename, data=await file.read())
    summary = service.upload_zip_file(archive, project_id=project_id)
    return UploadResponse.from_summary(summary)


@router.get(
    "/files",
    response_model=list[str],
    summary="List project files",
    description="Return every storage key under projects/<projectId>/.",
    responses=_ERROR_RESPONSES,
)
def list_files(
    service: FileService,
    project_id: Annotated[str, Query(alias="projectId", description="Project id")],
) -> list[str]:
    return service.list_files(project_id)


@router.get(
    "/file",
    response_class=PlainTextResponse,
    summary="Get file content",
    description="Return one object's content decoded as UTF-8 text.",
    responses=_ERROR_RESPONSES,
)
def get_file(
    service: FileService,
    project_id: Annotated[str, Query(alias="projectId", description="Project id")],
    file_path: Annotated[
        str, Query(alias="filePath", description="File path relative to the project")
    ],
) -> str:
    return service.get_file_content(project_id, file_path)
