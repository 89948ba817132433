"""Health check routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from argos_file_manager.config import Settings, get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(settings: Annotated[Settings, Depends(get_settings)]) -> dict[str, str]:
    """Return the API status and whether a storage bucket is configured."""
    return {
        "status": "healthy",
        "storage": "configured" if settings.bucket_name else "unconfigured",
    }
