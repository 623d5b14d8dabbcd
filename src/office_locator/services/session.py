"""Per-viewer map session: office data, filters, notices and the viewport."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence

from ..config import settings
from ..data.nocodb_client import OfficeDataUnavailable
from ..data.offices_repository import clear_offices_cache, load_offices
from ..models.domain import Coordinate, Office
from .filtering import ALL, filter_offices, summarize_filters
from .geocoding import GeocodeError, Geocoder
from .viewport import ViewportController, ViewportSnapshot

logger = logging.getLogger(__name__)

OfficeLoader = Callable[[], Sequence[Office]]


class LoadStatus(str, Enum):
    PENDING = "pending"
    READY = "ready"
    ERROR = "error"


class NoticeKind(str, Enum):
    DATA_UNAVAILABLE = "data_unavailable"
    ADDRESS_NOT_FOUND = "address_not_found"
    GEOCODE_FAILED = "geocode_failed"
    LOCATION_UNAVAILABLE = "location_unavailable"


LOCATION_FAILURE_MESSAGES = {
    "denied": "Unable to retrieve your location: permission was denied.",
    "unavailable": "Unable to retrieve your location.",
    "timeout": "Unable to retrieve your location: the request timed out.",
}


@dataclass(frozen=True, slots=True)
class Notice:
    kind: NoticeKind
    message: str


@dataclass(slots=True)
class InitialTrigger:
    near_me: Optional[Coordinate] = None
    address: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SessionView:
    session_id: str
    status: LoadStatus
    error: Optional[str]
    party: str
    province: str
    filtered: tuple[Office, ...]
    filter_options: dict
    selected_id: Optional[str]
    viewport: ViewportSnapshot
    notices: tuple[Notice, ...] = field(default_factory=tuple)


class MapSession:
    """Routes every viewer event through one viewport controller, one event at a time."""

    def __init__(
        self,
        session_id: str | None = None,
        *,
        loader: OfficeLoader | None = None,
        geocoder: Geocoder | None = None,
        nearest_count: int | None = None,
    ) -> None:
        self.session_id = session_id or uuid.uuid4().hex
        self._loader = loader
        self.geocoder = geocoder or Geocoder()
        self.controller = ViewportController(nearest_count=nearest_count)
        self.controller.on_selection_change(self._on_selection_change)
        self.offices: tuple[Office, ...] = ()
        self.status = LoadStatus.PENDING
        self.error: Optional[str] = None
        self.party = ALL
        self.province = ALL
        self.selected_id: Optional[str] = None
        self._notices: list[Notice] = []
        self._trigger: Optional[InitialTrigger] = None
        self._trigger_consumed = False
        self._lock = threading.RLock()

    def _on_selection_change(self, office: Optional[Office]) -> None:
        self.selected_id = office.office_id if office else None

    def _notify(self, kind: NoticeKind, message: str) -> None:
        logger.warning("Session %s notice %s: %s", self.session_id, kind.value, message)
        self._notices.append(Notice(kind=kind, message=message))

    # -- data --------------------------------------------------------------

    def load(self) -> SessionView:
        """Fetch offices; a failure leaves an empty list, an error flag and the default camera."""
        with self._lock:
            try:
                offices = tuple((self._loader or load_offices)())
            except OfficeDataUnavailable as exc:
                logger.warning("Office data unavailable: %s", exc)
                self.offices = ()
                self.status = LoadStatus.ERROR
                self.error = "Failed to load office data"
                self._notify(NoticeKind.DATA_UNAVAILABLE, self.error)
                self.controller.load(())
                return self.snapshot()

            self.offices = offices
            self.status = LoadStatus.READY
            self.error = None
            self.controller.load(filter_offices(offices, self.party, self.province))
            self._run_pending_trigger()
            return self.snapshot()

    def refresh(self) -> SessionView:
        with self._lock:
            if self._loader is None:
                clear_offices_cache()
            return self.load()

    # -- events ------------------------------------------------------------

    def apply_filter(self, party: str = ALL, province: str = ALL) -> SessionView:
        with self._lock:
            self.party = party or ALL
            self.province = province or ALL
            self.controller.set_filtered(filter_offices(self.offices, self.party, self.province))
            return self.snapshot()

    def get_office(self, office_id: str) -> Office:
        for office in self.offices:
            if office.office_id == office_id:
                return office
        raise KeyError(office_id)

    def select(self, office_id: str) -> SessionView:
        """Focus an office.

        Raises:
            KeyError: no such office.
            ValueError: the office is hidden by the current filter.
        """
        with self._lock:
            self.controller.select(self.get_office(office_id))
            return self.snapshot()

    def back_to_overview(self) -> SessionView:
        with self._lock:
            self.controller.back_to_overview()
            return self.snapshot()

    def locate(self, location: Coordinate) -> SessionView:
        with self._lock:
            self.controller.locate_user(location)
            return self.snapshot()

    def location_failed(self, reason: str) -> SessionView:
        with self._lock:
            message = LOCATION_FAILURE_MESSAGES.get(reason, LOCATION_FAILURE_MESSAGES["unavailable"])
            self._notify(NoticeKind.LOCATION_UNAVAILABLE, message)
            return self.snapshot()

    def search_address(self, address: str) -> SessionView:
        """Geocode an address and centre on it; failures only add a notice."""
        with self._lock:
            self._search(address)
            return self.snapshot()

    def _search(self, address: str) -> None:
        try:
            location = self.geocoder.lookup(address)
        except GeocodeError as exc:
            logger.warning("Geocoding %r failed: %s", address, exc)
            self._notify(NoticeKind.GEOCODE_FAILED, "Address lookup failed. Please try again.")
            return
        if location is None:
            self._notify(NoticeKind.ADDRESS_NOT_FOUND, f"Address not found: {address}")
            return
        self.controller.locate_user(location)

    def camera_settled(self, revision: int) -> SessionView:
        with self._lock:
            self.controller.camera_settled(revision)
            return self.snapshot()

    def run_initial_trigger(self, near_me: Coordinate | None = None, address: str | None = None) -> SessionView:
        """Queue a one-shot "near me" or address trigger for the first successful load."""
        with self._lock:
            if near_me is not None or (address and address.strip()):
                if not self._trigger_consumed:
                    self._trigger = InitialTrigger(near_me=near_me, address=address)
                    if self.status is LoadStatus.READY:
                        self._run_pending_trigger()
            return self.snapshot()

    def _run_pending_trigger(self) -> None:
        trigger, self._trigger = self._trigger, None
        if trigger is None or self._trigger_consumed:
            return
        self._trigger_consumed = True
        if trigger.near_me is not None:
            self.controller.locate_user(trigger.near_me)
        elif trigger.address:
            self._search(trigger.address)

    # -- view --------------------------------------------------------------

    def snapshot(self) -> SessionView:
        """Current view; pending notices are handed out once."""
        with self._lock:
            notices, self._notices = tuple(self._notices), []
            return SessionView(
                session_id=self.session_id,
                status=self.status,
                error=self.error,
                party=self.party,
                province=self.province,
                filtered=self.controller.inputs.filtered,
                filter_options=summarize_filters(self.offices),
                selected_id=self.selected_id,
                viewport=self.controller.snapshot(),
                notices=notices,
            )


class SessionRegistry:
    """In-process store of live map sessions.

    Sessions idle for longer than ``idle_seconds`` are dropped, and once
    ``max_sessions`` are live the least recently used one makes room for a
    new session. Clients should still delete sessions they are done with.
    """

    def __init__(
        self,
        factory: Callable[[], MapSession] | None = None,
        *,
        max_sessions: int | None = None,
        idle_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._factory = factory or MapSession
        self._max_sessions = max_sessions or settings.max_sessions
        self._idle_seconds = idle_seconds or settings.session_idle_seconds
        self._clock = clock
        self._sessions: OrderedDict[str, tuple[MapSession, float]] = OrderedDict()
        self._lock = threading.Lock()

    def _evict_idle(self, now: float) -> None:
        while self._sessions:
            session_id, (_, last_seen) = next(iter(self._sessions.items()))
            if now - last_seen <= self._idle_seconds:
                return
            self._sessions.popitem(last=False)
            logger.info("Evicted idle map session %s", session_id)

    def _make_room(self, now: float) -> None:
        self._evict_idle(now)
        while len(self._sessions) >= self._max_sessions:
            session_id, _ = self._sessions.popitem(last=False)
            logger.info("Evicted least recently used map session %s", session_id)

    def create(self) -> MapSession:
        session = self._factory()
        with self._lock:
            now = self._clock()
            self._make_room(now)
            self._sessions[session.session_id] = (session, now)
        return session

    def get(self, session_id: str) -> MapSession:
        with self._lock:
            now = self._clock()
            self._evict_idle(now)
            session, _ = self._sessions[session_id]
            self._sessions[session_id] = (session, now)
            self._sessions.move_to_end(session_id)
            return session

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
