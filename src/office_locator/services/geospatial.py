"""Geospatial helper functions and map bounds fitting."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Sequence

from shapely.geometry import MultiPoint, Point, box

from ..config import settings
from ..models.domain import BoundsCamera, CameraState, Coordinate, PointCamera

EARTH_RADIUS_KM = 6371.0

# (max padded span in degrees, zoom) checked in order; wider spans fall through to FALLBACK_ZOOM.
ZOOM_BY_SPAN: tuple[tuple[float, int], ...] = (
    (0.01, 13),
    (0.05, 11),
    (0.1, 9),
    (0.5, 7),
    (2.0, 6),
)
FALLBACK_ZOOM = 5

logger = logging.getLogger(__name__)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def is_valid_coordinate(point: Optional[Coordinate]) -> bool:
    """Return True for finite coordinates inside the global lat/lon ranges."""

    if point is None:
        return False
    lat, lon = point.latitude, point.longitude
    if lat is None or lon is None:
        return False
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def in_region(point: Coordinate, region: Sequence[float] | None = None) -> bool:
    """Return True if the point lies inside the deployment region box (edges included)."""

    min_lat, min_lon, max_lat, max_lon = region or settings.region_box
    return box(min_lon, min_lat, max_lon, max_lat).covers(Point(point.longitude, point.latitude))


def filter_reasonable(points: Iterable[Optional[Coordinate]], region: Sequence[float] | None = None) -> list[Coordinate]:
    """Drop non-finite, out-of-range and out-of-region coordinates."""

    kept: list[Coordinate] = []
    for point in points:
        if not is_valid_coordinate(point) or not in_region(point, region):
            logger.debug("Excluding coordinate from bounds: %s", point)
            continue
        kept.append(point)
    return kept


def zoom_for_span(span_degrees: float, padding_factor: float | None = None) -> int:
    """Pick a zoom level from the span of the bounding box's larger side."""

    factor = padding_factor if padding_factor is not None else settings.bounds_padding_factor
    padded = span_degrees * factor
    for threshold, zoom in ZOOM_BY_SPAN:
        if padded < threshold:
            return zoom
    return FALLBACK_ZOOM


def _widen(low: float, high: float, factor: float, min_span: float) -> tuple[float, float]:
    span = max(high - low, min_span) * factor
    mid = (low + high) / 2
    return mid - span / 2, mid + span / 2


def compute_bounds(
    points: Iterable[Optional[Coordinate]],
    *,
    region: Sequence[float] | None = None,
    padding_factor: float | None = None,
    min_span: float | None = None,
) -> CameraState:
    """Compute the camera that shows every reasonable point.

    No usable point gives the configured default camera, a single distinct
    point gives a point camera at the single item zoom, and anything more
    gives a padded bounds camera. The result depends only on the set of
    distinct points, never on their order or multiplicity.
    """

    factor = padding_factor if padding_factor is not None else settings.bounds_padding_factor
    span_floor = min_span if min_span is not None else settings.min_bounds_span_degrees

    distinct = sorted({point.as_tuple() for point in filter_reasonable(points, region)})
    if not distinct:
        lat, lon = settings.default_center
        return PointCamera(center=Coordinate(lat, lon), zoom=settings.default_zoom)
    if len(distinct) == 1:
        lat, lon = distinct[0]
        return PointCamera(center=Coordinate(lat, lon), zoom=settings.single_item_zoom)

    min_lon, min_lat, max_lon, max_lat = MultiPoint([(lon, lat) for lat, lon in distinct]).bounds
    center = Coordinate((min_lat + max_lat) / 2, (min_lon + max_lon) / 2)
    zoom = zoom_for_span(max(max_lat - min_lat, max_lon - min_lon), factor)

    south, north = _widen(min_lat, max_lat, factor, span_floor)
    west, east = _widen(min_lon, max_lon, factor, span_floor)
    return BoundsCamera(
        south_west=Coordinate(max(south, -90.0), max(west, -180.0)),
        north_east=Coordinate(min(north, 90.0), min(east, 180.0)),
        center=center,
        zoom=zoom,
    )
