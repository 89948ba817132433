from __future__ import annotations

import io
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from botocore.exceptions import ClientError

from argos_file_manager.api.dependencies import get_storage_repository
from argos_file_manager.api.main import app
from argos_file_manager.repositories.s3_repository import S3Repository

TEST_BUCKET = "argos-test-bucket"


class _Paginator:
    def __init__(self, client: FakeS3Client, page_size: int) -> None:
        self._client = client
        self._page_size = page_size

    def paginate(self, Bucket: str, Prefix: str = "") -> Iterator[dict[str, Any]]:
        self._client.calls.append(("list_objects_v2", Bucket, Prefix))
        keys = [key for key in self._client.objects if key.startswith(Prefix)]
        if not keys:
            yield {"KeyCount": 0}
            return
        for start in range(0, len(keys), self._page_size):
            chunk = keys[start : start + self._page_size]
            yield {"KeyCount": len(chunk), "Contents": [{"Key": key} for key in chunk]}


class FakeS3Client:
    """In-memory stand-in for the boto3 S3 client operations the repository uses."""

    def __init__(self, page_size: int = 1000) -> None:
        self.objects: dict[str, bytes] = {}
        self.calls: list[tuple[str, ...]] = []
        self.page_size = page_size

    def put_object(self, Bucket: str, Key: str, Body: Any) -> dict[str, Any]:
        self.calls.append(("put_object", Bucket, Key))
        data = Body.read() if hasattr(Body, "read") else Body
        self.objects[Key] = data if isinstance(data, bytes) else str(data).encode("utf-8")
        return {}

    def get_object(self, Bucket: str, Key: str) -> dict[str, Any]:
        self.calls.append(("get_object", Bucket, Key))
        if Key not in self.objects:
            raise ClientError(
                {"Error": {"Code": "NoSuchKey", "Message": "The specified key does not exist."}},
                "GetObject",
            )
        return {"Body": io.BytesIO(self.objects[Key])}

    def get_paginator(self, operation_name: str) -> _Paginator:
        assert operation_name == "list_objects_v2"
        return _Paginator(self, self.page_size)


@pytest.fixture
def fake_s3() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def repository(fake_s3: FakeS3Client) -> S3Repository:
    return S3Repository(fake_s3, TEST_BUCKET)


@pytest.fixture
def sample_dir(tmp_path: Path) -> Path:
    root = tmp_path / "sample"
    (root / "src" / "utils").mkdir(parents=True)
    (root / "file1.txt").write_text("Sample content", encoding="utf-8")
    (root / "src" / "app.py").write_text("print('hello')\n", encoding="utf-8")
    (root / "src" / "utils" / "helpers.py").write_text("def add(a, b): return a + b\n")
    return root


@pytest.fixture
def api_storage(repository: S3Repository) -> Iterator[S3Repository]:
    """Point the API at an in-memory bucket for the duration of a test."""
    app.dependency_overrides[get_storage_repository] = lambda: repository
    yield repository
    app.dependency_overrides.pop(get_storage_repository, None)

