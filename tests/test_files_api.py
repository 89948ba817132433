from __future__ import annotations

import io
import uuid
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

import pytest
from fastapi.testclient import TestClient

from argos_file_manager.api.dependencies import get_storage_repository
from argos_file_manager.api.main import app
from argos_file_manager.repositories.s3_repository import S3Repository


def _create_zip_bytes(entries: list[tuple[str, bytes]]) -> bytes:
    buffer = io.BytesIO()
    with ZipFile(buffer, "w", ZIP_DEFLATED) as archive:
        for name, data in entries:
            archive.writestr(name, data)
    return buffer.getvalue()


pytestmark = pytest.mark.usefixtures("api_storage")


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _assert_error(response, status_code: int, message: str) -> None:
    assert response.status_code == status_code
    body = response.json()
    assert body["status"] == status_code
    assert message in body["message"]
    assert "timestamp" in body
    assert "error" in body


class TestUploadDirectory:
    def test_upload_generates_project_id(self, client: TestClient, sample_dir: Path) -> None:
        response = client.post("/fileManager/upload", params={"localDir": str(sample_dir)})

        assert response.status_code == 200
        body = response.json()
        project_id = body["projectId"]
        uuid.UUID(project_id)
        assert body["uploadResults"] == {
            f"projects/{project_id}/file1.txt": "Uploaded",
            f"projects/{project_id}/src/app.py": "Uploaded",
            f"projects/{project_id}/src/utils/helpers.py": "Uploaded",
        }

    def test_upload_with_project_id(self, client: TestClient, sample_dir: Path) -> None:
        response = client.post(
            "/fileManager/upload", params={"localDir": str(sample_dir), "projectId": "p1"}
        )

        assert response.status_code == 200
        assert response.json()["projectId"] == "p1"
        assert "projects/p1/file1.txt" in response.json()["uploadResults"]

    def test_upload_invalid_directory(self, client: TestClient, tmp_path: Path) -> None:
        response = client.post(
            "/fileManager/upload", params={"localDir": str(tmp_path / "missing")}
        )

        _assert_error(response, 400, "Invalid local directory")

    def test_upload_empty_directory(self, client: TestClient, tmp_path: Path) -> None:
        response = client.post("/fileManager/upload", params={"localDir": str(tmp_path)})

        _assert_error(response, 400, "No files found in the directory to upload.")

    def test_upload_blank_project_id(self, client: TestClient, sample_dir: Path) -> None:
        response = client.post(
            "/fileManager/upload", params={"localDir": str(sample_dir), "projectId": "  "}
        )

        _assert_error(response, 400, "Project ID cannot be null or empty.")

    def test_upload_requires_local_dir(self, client: TestClient) -> None:
        response = client.post("/fileManager/upload")

        _assert_error(response, 400, "Missing required parameter: localDir")
        assert response.json()["error"] == "Bad Request"


class TestUploadZip:
    def test_upload_zip(self, client: TestClient, api_storage: S3Repository) -> None:
        zip_bytes = _create_zip_bytes(
            [("test.txt", b"Sample content"), ("src/main.py", b"print('hello')\n")]
        )

        response = client.post(
            "/fileManager/upload-zip",
            files={"file": ("project.zip", zip_bytes, "application/zip")},
            data={"projectId": "p1"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "projectId": "p1",
            "uploadResults": {
                "projects/p1/src/main.py": "Uploaded",
                "projects/p1/test.txt": "Uploaded",
            },
        }

    def test_upload_zip_generates_project_id(self, client: TestClient) -> None:
        zip_bytes = _create_zip_bytes([("test.txt", b"Sample content")])

        response = client.post(
            "/fileManager/upload-zip",
            files={"file": ("project.zip", zip_bytes, "application/zip")},
        )

        assert response.status_code == 200
        project_id = response.json()["projectId"]
        uuid.UUID(project_id)
        assert response.json()["uploadResults"] == {f"projects/{project_id}/test.txt": "Uploaded"}

    def test_upload_zip_slip_rejected(self, client: TestClient) -> None:
        zip_bytes = _create_zip_bytes([("../../etc/passwd", b"root")])

        response = client.post(
            "/fileManager/upload-zip",
            files={"file": ("evil.zip", zip_bytes, "application/zip")},
        )

        _assert_error(response, 400, "Invalid ZIP entry")

    def test_upload_zip_empty_project_id_is_rejected(
        self, client: TestClient, fake_s3
    ) -> None:
        zip_bytes = _create_zip_bytes([("test.txt", b"Sample content")])

        response = client.post(
            "/fileManager/upload-zip",
            files={"file": ("project.zip", zip_bytes, "application/zip")},
            data={"projectId": ""},
        )

        _assert_error(response, 400, "Project ID cannot be null or empty.")
        assert fake_s3.calls == []

    def test_upload_zip_requires_file(self, client: TestClient) -> None:
        response = client.post("/fileManager/upload-zip", data={"projectId": "p1"})

        _assert_error(response, 400, "Missing required parameter: file")

    def test_upload_empty_zip_payload(self, client: TestClient) -> None:
        response = client.post(
            "/fileManager/upload-zip",
            files={"file": ("empty.zip", b"", "application/zip")},
        )

        _assert_error(response, 400, "Uploaded ZIP file is null or empty.")

    def test_upload_corrupt_zip(self, client: TestClient) -> None:
        response = client.post(
            "/fileManager/upload-zip",
            files={"file": ("broken.zip", b"not a real zip", "application/zip")},
        )

        _assert_error(response, 400, "Error extracting ZIP file")


class TestListFiles:
    def test_list_files(self, client: TestClient, sample_dir: Path) -> None:
        client.post("/fileManager/upload", params={"localDir": str(sample_dir), "projectId": "p1"})

        response = client.get("/fileManager/files", params={"projectId": "p1"})

        assert response.status_code == 200
        assert sorted(response.json()) == [
            "projects/p1/file1.txt",
            "projects/p1/src/app.py",
            "projects/p1/src/utils/helpers.py",
        ]

    def test_list_files_empty_project(self, client: TestClient) -> None:
        response = client.get("/fileManager/files", params={"projectId": "missing"})

        _assert_error(response, 404, "No files found for project ID: missing")

    def test_list_files_blank_project(self, client: TestClient) -> None:
        response = client.get("/fileManager/files", params={"projectId": ""})

        _assert_error(response, 400, "Project ID cannot be null or empty.")


class TestGetFile:
    def test_round_trip(self, client: TestClient, tmp_path: Path) -> None:
        (tmp_path / "file1.txt").write_text("Sample content", encoding="utf-8")
        client.post("/fileManager/upload", params={"localDir": str(tmp_path), "projectId": "p1"})

        response = client.get(
            "/fileManager/file", params={"projectId": "p1", "filePath": "file1.txt"}
        )

        assert response.status_code == 200
        assert response.text == "Sample content"
        assert response.headers["content-type"].startswith("text/plain")

    def test_missing_file(self, client: TestClient) -> None:
        response = client.get(
            "/fileManager/file", params={"projectId": "p1", "filePath": "missing.txt"}
        )

        _assert_error(response, 404, "File not found: missing.txt")

    def test_missing_file_path(self, client: TestClient) -> None:
        response = client.get("/fileManager/file", params={"projectId": "p1"})

        _assert_error(response, 400, "Missing required parameter: filePath")

    def test_missing_project_id(self, client: TestClient) -> None:
        response = client.get("/fileManager/files")

        _assert_error(response, 400, "Missing required parameter: projectId")

    def test_blank_file_path(self, client: TestClient) -> None:
        response = client.get("/fileManager/file", params={"projectId": "p1", "filePath": " "})

        _assert_error(response, 400, "File path cannot be null or empty.")


class TestErrorHandling:
    def test_unexpected_error_is_generic_500(self) -> None:
        class _BrokenRepository:
            def list_files(self, project_id: str) -> list[str]:
                raise RuntimeError("secret implementation detail")

        app.dependency_overrides[get_storage_repository] = lambda: _BrokenRepository()
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/fileManager/files", params={"projectId": "p1"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Internal Server Error"
        assert "secret implementation detail" not in response.text
