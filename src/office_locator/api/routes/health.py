"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/data-source", status_code=status.HTTP_200_OK)
def health_data_source() -> dict:
    """Report which office data source is configured, without fetching."""
    if settings.nocodb_base_id and settings.nocodb_table_id:
        source = "nocodb"
    elif settings.offices_file:
        source = "file"
    else:
        source = "sample"
    return {"source": source}
