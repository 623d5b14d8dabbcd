import pytest

from office_locator.config import settings
from office_locator.data.nocodb_client import OfficeDataUnavailable
from office_locator.models.domain import Coordinate, Office, OfficeCategory, PointCamera
from office_locator.services.geocoding import GeocodeError
from office_locator.services.session import LoadStatus, MapSession, NoticeKind, SessionRegistry
from office_locator.services.viewport import ViewState


def _office(oid: str, lat: float, lon: float, party: str = "DA", province: str = "Gauteng") -> Office:
    return Office(
        office_id=oid,
        name=f"Office {oid}",
        coordinate=Coordinate(lat, lon),
        address="1 Main Road",
        category=OfficeCategory.PROVINCIAL_OFFICE,
        party=party,
        province=province,
    )


OFFICES = (
    _office("1", -33.9249, 18.4241, party="DA", province="Western Cape"),
    _office("2", -26.2041, 28.0473, party="ANC"),
    _office("3", -29.8587, 31.0218, party="EFF", province="KwaZulu-Natal"),
    _office("4", -25.7479, 28.2293, party="ANC"),
    _office("5", -29.0852, 26.1596, party="DA", province="Free State"),
)


class FakeGeocoder:
    def __init__(self, result=None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[str] = []

    def lookup(self, address: str):
        self.calls.append(address)
        if self.error:
            raise self.error
        return self.result


def _session(geocoder=None, loader=None) -> MapSession:
    return MapSession(loader=loader or (lambda: OFFICES), geocoder=geocoder or FakeGeocoder())


def test_load_success_shows_overview():
    view = _session().load()

    assert view.status is LoadStatus.READY
    assert view.viewport.state is ViewState.OVERVIEW
    assert len(view.filtered) == 5
    assert view.notices == ()


def test_load_failure_sets_error_and_default_camera():
    def failing_loader():
        raise OfficeDataUnavailable("backend down")

    view = _session(loader=failing_loader).load()

    assert view.status is LoadStatus.ERROR
    assert view.error == "Failed to load office data"
    assert view.filtered == ()
    assert view.viewport.state is not ViewState.IDLE
    assert view.viewport.camera == PointCamera(
        center=Coordinate(*settings.default_center), zoom=settings.default_zoom
    )
    assert [notice.kind for notice in view.notices] == [NoticeKind.DATA_UNAVAILABLE]


def test_refresh_recovers_after_failure():
    attempts = {"count": 0}

    def flaky_loader():
        attempts["count"] += 1
        if attempts["count"] == 1:
            raise OfficeDataUnavailable("backend down")
        return OFFICES

    session = _session(loader=flaky_loader)
    session.load()
    view = session.refresh()

    assert view.status is LoadStatus.READY
    assert view.error is None
    assert len(view.filtered) == 5


def test_unresolvable_address_keeps_camera_and_notifies_once():
    geocoder = FakeGeocoder(result=None)
    session = _session(geocoder=geocoder)
    session.load()
    session.select("2")
    before = session.snapshot()

    after = session.search_address("42 Nowhere Lane")

    assert after.viewport.camera == before.viewport.camera
    assert after.viewport.state is ViewState.FOCUSED
    assert after.selected_id == "2"
    assert [notice.kind for notice in after.notices] == [NoticeKind.ADDRESS_NOT_FOUND]
    assert session.snapshot().notices == ()


def test_geocode_error_keeps_filters_and_selection():
    session = _session(geocoder=FakeGeocoder(error=GeocodeError("timeout")))
    session.load()
    session.apply_filter(party="ANC")
    session.select("4")

    view = session.search_address("Pretoria")

    assert view.party == "ANC"
    assert view.selected_id == "4"
    assert [notice.kind for notice in view.notices] == [NoticeKind.GEOCODE_FAILED]


def test_resolved_address_centres_on_user():
    session = _session(geocoder=FakeGeocoder(result=Coordinate(-26.1, 28.0)))
    session.load()

    view = session.search_address("Sandton")

    assert view.viewport.state is ViewState.USER_CENTERED
    assert view.notices == ()


def test_location_failure_leaves_camera_unchanged():
    session = _session()
    session.load()
    before = session.snapshot()

    view = session.location_failed("denied")

    assert view.viewport == before.viewport
    assert view.notices[0].kind is NoticeKind.LOCATION_UNAVAILABLE
    assert "denied" in view.notices[0].message


def test_filter_change_clears_hidden_selection():
    session = _session()
    session.load()
    session.select("1")

    view = session.apply_filter(party="ANC")

    assert view.selected_id is None
    assert view.viewport.state is ViewState.OVERVIEW
    assert [office.office_id for office in view.filtered] == ["2", "4"]


def test_select_unknown_or_hidden_office():
    session = _session()
    session.load()
    session.apply_filter(province="Gauteng")

    with pytest.raises(KeyError):
        session.select("99")
    with pytest.raises(ValueError):
        session.select("1")


def test_back_to_overview_clears_selection_owner():
    session = _session()
    session.load()
    session.select("3")

    view = session.back_to_overview()

    assert view.selected_id is None
    assert view.viewport.highlighted_id is None
    assert view.viewport.state is ViewState.OVERVIEW


def test_initial_trigger_runs_once_after_first_successful_load():
    attempts = {"count": 0}

    def flaky_loader():
        attempts["count"] += 1
        if attempts["count"] == 1:
            raise OfficeDataUnavailable("backend down")
        return OFFICES

    session = _session(loader=flaky_loader)
    session.run_initial_trigger(near_me=Coordinate(-26.2, 28.0))

    assert session.load().viewport.state is ViewState.OVERVIEW
    assert session.refresh().viewport.state is ViewState.USER_CENTERED

    session.back_to_overview()
    assert session.refresh().viewport.state is ViewState.OVERVIEW


def test_initial_address_trigger_reports_missing_address():
    geocoder = FakeGeocoder(result=None)
    session = _session(geocoder=geocoder)
    session.run_initial_trigger(address="Atlantis")

    view = session.load()

    assert geocoder.calls == ["Atlantis"]
    assert [notice.kind for notice in view.notices] == [NoticeKind.ADDRESS_NOT_FOUND]
    assert view.viewport.state is ViewState.OVERVIEW


def test_popup_follows_camera_settled():
    session = _session()
    session.load()
    focused = session.select("5")

    assert focused.viewport.popup_open is False
    assert session.camera_settled(focused.viewport.revision).viewport.popup_open is True


def test_registry_create_get_discard():
    registry = SessionRegistry(factory=_session)
    session = registry.create()

    assert registry.get(session.session_id) is session
    registry.discard(session.session_id)
    with pytest.raises(KeyError):
        registry.get(session.session_id)


def test_registry_evicts_least_recently_used_at_capacity():
    registry = SessionRegistry(factory=_session, max_sessions=2, clock=lambda: 0.0)
    first = registry.create()
    second = registry.create()
    registry.get(first.session_id)

    third = registry.create()

    assert len(registry) == 2
    assert registry.get(first.session_id) is first
    assert registry.get(third.session_id) is third
    with pytest.raises(KeyError):
        registry.get(second.session_id)


def test_registry_drops_idle_sessions():
    now = [0.0]
    registry = SessionRegistry(factory=_session, idle_seconds=60, clock=lambda: now[0])
    stale = registry.create()
    now[0] = 45.0
    fresh = registry.create()

    now[0] = 90.0

    with pytest.raises(KeyError):
        registry.get(stale.session_id)
    assert registry.get(fresh.session_id) is fresh
