import httpx
import pytest

from office_locator.models.domain import Coordinate
from office_locator.services.geocoding import GeocodeError, Geocoder


def _geocoder(handler) -> Geocoder:
    return Geocoder(base_url="http://geocoder.test/search", transport=httpx.MockTransport(handler))


def test_lookup_returns_first_match():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["q"] == "90 Plein Street, Cape Town"
        assert request.url.params["countrycodes"] == "za"
        return httpx.Response(200, json=[{"lat": "-33.9249", "lon": "18.4241"}])

    assert _geocoder(handler).lookup("90 Plein Street, Cape Town") == Coordinate(-33.9249, 18.4241)


def test_lookup_without_results_returns_none():
    assert _geocoder(lambda request: httpx.Response(200, json=[])).lookup("nowhere at all") is None


def test_blank_address_skips_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    assert _geocoder(handler).lookup("   ") is None


def test_lookup_http_error_raises():
    with pytest.raises(GeocodeError):
        _geocoder(lambda request: httpx.Response(503)).lookup("Cape Town")


def test_lookup_bad_payload_raises():
    with pytest.raises(GeocodeError):
        _geocoder(lambda request: httpx.Response(200, json=[{"display_name": "x"}])).lookup("Cape Town")
