"""Viewport controller: fuses selection, filter and user location into one camera."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional, Sequence

from ...config import settings
from ...models.domain import CameraState, Coordinate, Office, PointCamera
from ..geospatial import compute_bounds, is_valid_coordinate
from ..nearest import nearest
from .states import ViewportInputs, ViewportSnapshot, ViewState

logger = logging.getLogger(__name__)

SelectionListener = Callable[[Optional[Office]], None]


def _default_camera() -> PointCamera:
    lat, lon = settings.default_center
    return PointCamera(center=Coordinate(lat, lon), zoom=settings.default_zoom)


def resolve_view(inputs: ViewportInputs, *, nearest_count: int | None = None) -> tuple[ViewState, CameraState]:
    """Derive the view state and camera from the full set of inputs.

    Priority: selection, then an active user focus, then the filtered overview.
    Nothing is shown before the first load.
    """

    if not inputs.loaded:
        return ViewState.IDLE, _default_camera()
    if inputs.selected is not None:
        office = inputs.selected
        return ViewState.FOCUSED, PointCamera(center=office.coordinate, zoom=settings.focused_zoom)
    if inputs.user_focus is not None:
        closest = nearest(inputs.user_focus, inputs.filtered, nearest_count)
        points = [inputs.user_focus, *(office.coordinate for office in closest)]
        return ViewState.USER_CENTERED, compute_bounds(points)
    return ViewState.OVERVIEW, compute_bounds(office.coordinate for office in inputs.filtered)


class ViewportController:
    """Owns the map camera and recomputes it once per input event."""

    def __init__(self, *, nearest_count: int | None = None) -> None:
        self.nearest_count = nearest_count
        self.inputs = ViewportInputs()
        self.last_user_location: Optional[Coordinate] = None
        self.state, self.camera = resolve_view(self.inputs)
        self.revision = 0
        self._settled_revision: Optional[int] = None
        self._selection_listeners: list[SelectionListener] = []

    # -- listeners ---------------------------------------------------------

    def on_selection_change(self, listener: SelectionListener) -> None:
        """Register a callback invoked whenever the controller changes the selection."""
        self._selection_listeners.append(listener)

    def _notify_selection(self) -> None:
        for listener in self._selection_listeners:
            listener(self.inputs.selected)

    # -- events ------------------------------------------------------------

    def load(self, offices: Sequence[Office]) -> ViewportSnapshot:
        """Replace the office data wholesale; the filtered set starts as all offices."""
        had_selection = self.inputs.selected is not None
        self.inputs = ViewportInputs(filtered=tuple(offices), loaded=True)
        self._recompute()
        if had_selection:
            self._notify_selection()
        return self.snapshot()

    def set_filtered(self, offices: Sequence[Office]) -> ViewportSnapshot:
        filtered = tuple(offices)
        selected = self.inputs.selected
        cleared = selected is not None and not any(o.office_id == selected.office_id for o in filtered)
        self.inputs = replace(
            self.inputs,
            filtered=filtered,
            selected=None if cleared else selected,
            user_focus=None,
        )
        if cleared:
            logger.debug("Selected office %s no longer matches the filter", selected.office_id)
        self._recompute()
        if cleared:
            self._notify_selection()
        return self.snapshot()

    def select(self, office: Office) -> ViewportSnapshot:
        if not any(o.office_id == office.office_id for o in self.inputs.filtered):
            raise ValueError(f"Office '{office.office_id}' is not in the current filtered set.")
        changed = self.inputs.selected is None or self.inputs.selected.office_id != office.office_id
        self.inputs = replace(self.inputs, selected=office, user_focus=None)
        self._recompute()
        if changed:
            self._notify_selection()
        return self.snapshot()

    def back_to_overview(self) -> ViewportSnapshot:
        """Force the filtered-set overview and clear any selection."""
        had_selection = self.inputs.selected is not None
        self.inputs = replace(self.inputs, selected=None, user_focus=None)
        self._recompute()
        if had_selection:
            self._notify_selection()
        return self.snapshot()

    def locate_user(self, location: Coordinate) -> ViewportSnapshot:
        """Centre on the user and the nearest offices; a newer location replaces the selection."""
        if not is_valid_coordinate(location):
            raise ValueError(f"Invalid user location: {location}")
        had_selection = self.inputs.selected is not None
        self.last_user_location = location
        self.inputs = replace(self.inputs, selected=None, user_focus=location)
        self._recompute()
        if had_selection:
            self._notify_selection()
        return self.snapshot()

    def camera_settled(self, revision: int) -> ViewportSnapshot:
        """Record that the renderer finished animating to ``revision``; stale reports are ignored."""
        if revision == self.revision:
            self._settled_revision = revision
        else:
            logger.debug("Ignoring settle for revision %s (current %s)", revision, self.revision)
        return self.snapshot()

    # -- state -------------------------------------------------------------

    @property
    def selected(self) -> Optional[Office]:
        return self.inputs.selected

    @property
    def highlighted_id(self) -> Optional[str]:
        return self.inputs.selected.office_id if self.inputs.selected else None

    def _recompute(self) -> None:
        previous = (self.state, self.camera, self.highlighted_id)
        self.state, self.camera = resolve_view(self.inputs, nearest_count=self.nearest_count)
        if (self.state, self.camera, self.highlighted_id) != previous:
            self.revision += 1
            self._settled_revision = None
            logger.debug("Viewport -> %s (revision %s)", self.state.value, self.revision)

    def snapshot(self) -> ViewportSnapshot:
        popup_open = (
            self.highlighted_id is not None
            and self._settled_revision is not None
            and self._settled_revision == self.revision
        )
        return ViewportSnapshot(
            state=self.state,
            camera=self.camera,
            highlighted_id=self.highlighted_id,
            popup_open=popup_open,
            revision=self.revision,
        )
