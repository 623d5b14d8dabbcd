"""State and input containers for the viewport controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...models.domain import CameraState, Coordinate, Office


class ViewState(str, Enum):
    IDLE = "idle"
    OVERVIEW = "overview"
    FOCUSED = "focused"
    USER_CENTERED = "user_centered"


@dataclass(frozen=True, slots=True)
class ViewportInputs:
    """Everything the camera is derived from.

    ``user_focus`` is the user coordinate only while the user-centred view is
    active; the controller keeps the last known coordinate separately.
    """

    selected: Optional[Office] = None
    filtered: tuple[Office, ...] = ()
    user_focus: Optional[Coordinate] = None
    loaded: bool = False


@dataclass(frozen=True, slots=True)
class ViewportSnapshot:
    state: ViewState
    camera: CameraState
    highlighted_id: Optional[str]
    popup_open: bool
    revision: int
