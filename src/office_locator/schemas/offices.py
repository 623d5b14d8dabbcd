"""Office-facing API schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import Office


class CoordinateModel(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class RepresentativeModel(BaseModel):
    name: str
    image: Optional[str] = None
    link: Optional[str] = None


class AdminContactModel(BaseModel):
    person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    details: Optional[str] = None


class OfficeModel(BaseModel):
    id: str
    name: str
    latitude: float
    longitude: float
    address: str
    category: str
    province: Optional[str] = None
    party: Optional[str] = None
    representatives: List[RepresentativeModel] = []
    admin: Optional[AdminContactModel] = None

    @classmethod
    def from_office(cls, office: Office) -> "OfficeModel":
        admin = office.admin
        return cls(
            id=office.office_id,
            name=office.name,
            latitude=office.latitude,
            longitude=office.longitude,
            address=office.address,
            category=office.category.value,
            province=office.province,
            party=office.party,
            representatives=[
                RepresentativeModel(name=rep.name, image=rep.image, link=rep.link)
                for rep in office.representatives
            ],
            admin=AdminContactModel(
                person=admin.person, phone=admin.phone, email=admin.email, details=admin.details
            )
            if admin
            else None,
        )


class FilterOptionModel(BaseModel):
    value: str
    count: int


class FilterOptionsResponse(BaseModel):
    total: int
    parties: List[FilterOptionModel]
    provinces: List[FilterOptionModel]


class NearestOfficeModel(BaseModel):
    office: OfficeModel
    distance_km: float


class NearestOfficesResponse(BaseModel):
    origin: CoordinateModel
    items: List[NearestOfficeModel]
