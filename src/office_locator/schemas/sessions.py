"""Pydantic request/response models for map session endpoints."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from ..models.domain import BoundsCamera, CameraState
from ..services.session import SessionView
from .offices import CoordinateModel, FilterOptionsResponse, OfficeModel


class CameraModel(BaseModel):
    mode: Literal["point", "bounds"]
    center: CoordinateModel
    zoom: int
    south_west: Optional[CoordinateModel] = None
    north_east: Optional[CoordinateModel] = None

    @classmethod
    def from_camera(cls, camera: CameraState) -> "CameraModel":
        center = CoordinateModel(latitude=camera.center.latitude, longitude=camera.center.longitude)
        if isinstance(camera, BoundsCamera):
            return cls(
                mode="bounds",
                center=center,
                zoom=camera.zoom,
                south_west=CoordinateModel(
                    latitude=camera.south_west.latitude, longitude=camera.south_west.longitude
                ),
                north_east=CoordinateModel(
                    latitude=camera.north_east.latitude, longitude=camera.north_east.longitude
                ),
            )
        return cls(mode="point", center=center, zoom=camera.zoom)


class NoticeModel(BaseModel):
    kind: str
    message: str


class ViewportModel(BaseModel):
    state: str
    camera: CameraModel
    highlighted_id: Optional[str] = None
    popup_open: bool
    revision: int


class SessionResponse(BaseModel):
    session_id: str
    status: str
    error: Optional[str] = None
    party: str
    province: str
    offices: List[OfficeModel]
    filters: FilterOptionsResponse
    selected_id: Optional[str] = None
    viewport: ViewportModel
    notices: List[NoticeModel]

    @classmethod
    def from_view(cls, view: SessionView) -> "SessionResponse":
        snapshot = view.viewport
        return cls(
            session_id=view.session_id,
            status=view.status.value,
            error=view.error,
            party=view.party,
            province=view.province,
            offices=[OfficeModel.from_office(office) for office in view.filtered],
            filters=FilterOptionsResponse.model_validate(view.filter_options),
            selected_id=view.selected_id,
            viewport=ViewportModel(
                state=snapshot.state.value,
                camera=CameraModel.from_camera(snapshot.camera),
                highlighted_id=snapshot.highlighted_id,
                popup_open=snapshot.popup_open,
                revision=snapshot.revision,
            ),
            notices=[NoticeModel(kind=notice.kind.value, message=notice.message) for notice in view.notices],
        )


class CreateSessionRequest(BaseModel):
    near_me: Optional[CoordinateModel] = Field(default=None, description="One-shot 'use my location' trigger.")
    address: Optional[str] = Field(default=None, description="One-shot address search trigger.")


class FilterRequest(BaseModel):
    party: str = Field(default="all")
    province: str = Field(default="all")


class SelectRequest(BaseModel):
    office_id: str


class LocationRequest(BaseModel):
    location: Optional[CoordinateModel] = None
    error: Optional[Literal["denied", "unavailable", "timeout"]] = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "LocationRequest":
        if (self.location is None) == (self.error is None):
            raise ValueError("Provide either a location or an error reason.")
        return self


class AddressRequest(BaseModel):
    address: str = Field(..., min_length=1)


class SettledRequest(BaseModel):
    revision: int = Field(..., ge=0)
