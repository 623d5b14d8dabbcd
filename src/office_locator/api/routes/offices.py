"""Office list endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from ...config import settings
from ...data import OfficeDataUnavailable, load_offices
from ...models.domain import Coordinate, Office
from ...schemas.offices import (
    CoordinateModel,
    FilterOptionsResponse,
    NearestOfficeModel,
    NearestOfficesResponse,
    OfficeModel,
)
from ...services.filtering import ALL, filter_offices, summarize_filters
from ...services.nearest import rank_by_distance

router = APIRouter(prefix="/offices", tags=["offices"])


def _offices() -> tuple[Office, ...]:
    try:
        return load_offices()
    except OfficeDataUnavailable as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Failed to load office data: {exc}",
        ) from exc


@router.get("", response_model=List[OfficeModel], status_code=status.HTTP_200_OK)
def list_offices(
    party: str = Query(default=ALL, description="Party code filter"),
    province: str = Query(default=ALL, description="Province filter"),
) -> List[OfficeModel]:
    return [OfficeModel.from_office(office) for office in filter_offices(_offices(), party, province)]


@router.get("/filters", response_model=FilterOptionsResponse, status_code=status.HTTP_200_OK)
def list_filters() -> FilterOptionsResponse:
    return FilterOptionsResponse.model_validate(summarize_filters(_offices()))


@router.get("/nearest", response_model=NearestOfficesResponse, status_code=status.HTTP_200_OK)
def nearest_offices(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lon: float = Query(..., ge=-180.0, le=180.0),
    k: int = Query(default=settings.nearest_count, ge=0, le=50),
) -> NearestOfficesResponse:
    origin = Coordinate(lat, lon)
    ranked = rank_by_distance(origin, _offices())[:k] if k > 0 else []
    return NearestOfficesResponse(
        origin=CoordinateModel(latitude=lat, longitude=lon),
        items=[
            NearestOfficeModel(office=OfficeModel.from_office(item.office), distance_km=round(item.distance_km, 3))
            for item in ranked
        ],
    )
