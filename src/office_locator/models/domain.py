"""Domain models for office records and map camera state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class OfficeCategory(str, Enum):
    MAIN_OFFICE = "Main Office"
    PROVINCIAL_OFFICE = "Provincial Office"
    MP_OFFICE = "MP Office"
    BRANCH_OFFICE = "Branch Office"


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A (latitude, longitude) pair in decimal degrees."""

    latitude: float
    longitude: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class Representative:
    name: str
    image: Optional[str] = None
    link: Optional[str] = None


@dataclass(frozen=True, slots=True)
class AdminContact:
    person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    details: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Office:
    """Represents a constituency office located on the map."""

    office_id: str
    name: str
    coordinate: Coordinate
    address: str
    category: OfficeCategory
    province: Optional[str] = None
    party: Optional[str] = None
    part: Optional[str] = None
    representatives: tuple[Representative, ...] = ()
    admin: Optional[AdminContact] = None
    raw: dict = field(default_factory=dict, compare=False, hash=False, repr=False)

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude


@dataclass(frozen=True, slots=True)
class PointCamera:
    """Camera centred on a coordinate at a fixed zoom level."""

    center: Coordinate
    zoom: int


@dataclass(frozen=True, slots=True)
class BoundsCamera:
    """Camera fitted to a rectangular region given by its south-west and north-east corners."""

    south_west: Coordinate
    north_east: Coordinate
    center: Coordinate
    zoom: int

    def contains(self, point: Coordinate) -> bool:
        return (
            self.south_west.latitude <= point.latitude <= self.north_east.latitude
            and self.south_west.longitude <= point.longitude <= self.north_east.longitude
        )


CameraState = Union[PointCamera, BoundsCamera]
