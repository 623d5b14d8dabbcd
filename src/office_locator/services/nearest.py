"""Nearest office ranking by great-circle distance."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..config import settings
from ..models.domain import Coordinate, Office
from .geospatial import haversine_km, is_valid_coordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RankedOffice:
    office: Office
    distance_km: float


def rank_by_distance(origin: Coordinate, offices: Sequence[Office]) -> list[RankedOffice]:
    """Rank offices closest first; ties keep their input order."""

    ranked: list[RankedOffice] = []
    for office in offices:
        if not is_valid_coordinate(office.coordinate):
            logger.debug("Skipping office %s with invalid coordinate", office.office_id)
            continue
        distance = haversine_km(origin.latitude, origin.longitude, office.latitude, office.longitude)
        ranked.append(RankedOffice(office=office, distance_km=distance))
    ranked.sort(key=lambda item: item.distance_km)
    return ranked


def nearest(origin: Coordinate, offices: Sequence[Office], k: int | None = None) -> list[Office]:
    """Return the ``k`` offices closest to ``origin`` (closest first)."""

    count = settings.nearest_count if k is None else k
    if count <= 0 or not is_valid_coordinate(origin):
        return []
    return [item.office for item in rank_by_distance(origin, offices)[:count]]
