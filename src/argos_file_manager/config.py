"""Runtime configuration loaded from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

import boto3
from botocore.client import BaseClient
from dotenv import load_dotenv

DEFAULT_REGION = "us-east-1"
DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://localhost:8081")


@dataclass(frozen=True, slots=True)
class Settings:
    """Settings for the storage client and the HTTP layer.

    Attributes:
        bucket_name: Bucket that holds every project prefix.
        region: Region passed to the S3 client.
        access_key_id: Static access key, or None to use the default chain.
        secret_access_key: Static secret key, or None to use the default chain.
        endpoint_url: Custom S3-compatible endpoint (MinIO, LocalStack).
        cors_origins: Origins allowed by the CORS middleware.
        log_level: Root log level used by the development server.
    """

    bucket_name: str | None = None
    region: str = DEFAULT_REGION
    access_key_id: str | None = None
    secret_access_key: str | None = None
    endpoint_url: str | None = None
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)
    log_level: str = "INFO"

    def require_bucket_name(self) -> str:
        if not self.bucket_name:
            raise RuntimeError("AWS_BUCKET_NAME not set")
        return self.bucket_name


def _cors_origins_from_env() -> tuple[str, ...]:
    origins = tuple(
        origin
        for origin in (os.getenv("ArgosAPI_address"), os.getenv("ArgosUI_address"))
        if origin
    )
    return origins or DEFAULT_CORS_ORIGINS


def load_settings() -> Settings:
    """Read settings from the process environment and any ``.env`` file."""
    load_dotenv()
    return Settings(
        bucket_name=os.getenv("AWS_BUCKET_NAME") or None,
        region=os.getenv("AWS_REGION") or DEFAULT_REGION,
        access_key_id=os.getenv("AWS_ACCESS_KEY_ID") or None,
        secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY") or None,
        endpoint_url=os.getenv("AWS_ENDPOINT_URL") or None,
        cors_origins=_cors_origins_from_env(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return load_settings()


def create_s3_client(settings: Settings) -> BaseClient:
    """Build a boto3 S3 client from settings.

    Static credentials are only passed when both halves are present, so that
    boto3 falls back to its default credential chain otherwise.
    """
    kwargs: dict[str, str] = {"region_name": settings.region}
    if settings.access_key_id and settings.secret_access_key:
        kwargs["aws_access_key_id"] = settings.access_key_id
        kwargs["aws_secret_access_key"] = settings.secret_access_key
    if settings.endpoint_url:
        kwargs["endpoint_url"] = settings.endpoint_url
    return boto3.client("s3", **kwargs)
