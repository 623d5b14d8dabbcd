"""Map session endpoints: one viewport per viewer, one event per request."""

from __future__ import annotations

from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, status

from ...models.domain import Coordinate
from ...schemas.sessions import (
    AddressRequest,
    CreateSessionRequest,
    FilterRequest,
    LocationRequest,
    SelectRequest,
    SessionResponse,
    SettledRequest,
)
from ...services.session import MapSession, SessionRegistry

router = APIRouter(prefix="/sessions", tags=["sessions"])


@lru_cache()
def get_registry() -> SessionRegistry:
    return SessionRegistry()


def _session(session_id: str, registry: SessionRegistry = Depends(get_registry)) -> MapSession:
    try:
        return registry.get(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown session '{session_id}'.") from exc


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def create_session(
    request: CreateSessionRequest | None = None,
    registry: SessionRegistry = Depends(get_registry),
) -> SessionResponse:
    session = registry.create()
    if request is not None:
        near_me = Coordinate(request.near_me.latitude, request.near_me.longitude) if request.near_me else None
        session.run_initial_trigger(near_me=near_me, address=request.address)
    return SessionResponse.from_view(session.load())


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(session: MapSession = Depends(_session)) -> SessionResponse:
    return SessionResponse.from_view(session.snapshot())


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: str, registry: SessionRegistry = Depends(get_registry)) -> None:
    registry.discard(session_id)


@router.post("/{session_id}/refresh", response_model=SessionResponse)
def refresh_session(session: MapSession = Depends(_session)) -> SessionResponse:
    return SessionResponse.from_view(session.refresh())


@router.post("/{session_id}/filter", response_model=SessionResponse)
def filter_session(request: FilterRequest, session: MapSession = Depends(_session)) -> SessionResponse:
    return SessionResponse.from_view(session.apply_filter(request.party, request.province))


@router.post("/{session_id}/select", response_model=SessionResponse)
def select_office(request: SelectRequest, session: MapSession = Depends(_session)) -> SessionResponse:
    try:
        view = session.select(request.office_id)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown office '{request.office_id}'."
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return SessionResponse.from_view(view)


@router.post("/{session_id}/overview", response_model=SessionResponse)
def back_to_overview(session: MapSession = Depends(_session)) -> SessionResponse:
    return SessionResponse.from_view(session.back_to_overview())


@router.post("/{session_id}/location", response_model=SessionResponse)
def report_location(request: LocationRequest, session: MapSession = Depends(_session)) -> SessionResponse:
    if request.error is not None:
        return SessionResponse.from_view(session.location_failed(request.error))
    location = Coordinate(request.location.latitude, request.location.longitude)
    return SessionResponse.from_view(session.locate(location))


@router.post("/{session_id}/address", response_model=SessionResponse)
def search_address(request: AddressRequest, session: MapSession = Depends(_session)) -> SessionResponse:
    return SessionResponse.from_view(session.search_address(request.address))


@router.post("/{session_id}/settled", response_model=SessionResponse)
def camera_settled(request: SettledRequest, session: MapSession = Depends(_session)) -> SessionResponse:
    return SessionResponse.from_view(session.camera_settled(request.revision))
