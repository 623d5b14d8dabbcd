import math

from office_locator.config import settings
from office_locator.models.domain import BoundsCamera, Coordinate, PointCamera
from office_locator.services.geospatial import (
    compute_bounds,
    filter_reasonable,
    haversine_km,
    zoom_for_span,
)

CITIES = [
    Coordinate(-33.9249, 18.4241),  # Cape Town
    Coordinate(-26.2041, 28.0473),  # Johannesburg
    Coordinate(-29.8587, 31.0218),  # Durban
    Coordinate(-29.6020, 30.3794),  # Pietermaritzburg
    Coordinate(-29.0852, 26.1596),  # Bloemfontein
]


def test_haversine_cape_town_to_johannesburg():
    distance = haversine_km(-33.9249, 18.4241, -26.2041, 28.0473)
    assert 1200 < distance < 1320


def test_compute_bounds_empty_returns_default():
    camera = compute_bounds([])

    assert camera == PointCamera(center=Coordinate(*settings.default_center), zoom=settings.default_zoom)


def test_compute_bounds_single_point_uses_single_item_zoom():
    camera = compute_bounds([CITIES[0]])

    assert isinstance(camera, PointCamera)
    assert camera.center == CITIES[0]
    assert camera.zoom == settings.single_item_zoom


def test_compute_bounds_contains_every_point():
    camera = compute_bounds(CITIES)

    assert isinstance(camera, BoundsCamera)
    for point in CITIES:
        assert camera.contains(point)
    # padded region is at least as large as the raw box
    assert camera.south_west.latitude <= min(p.latitude for p in CITIES)
    assert camera.north_east.longitude >= max(p.longitude for p in CITIES)


def test_compute_bounds_is_order_and_duplicate_invariant():
    forward = compute_bounds(CITIES)

    assert compute_bounds(list(reversed(CITIES))) == forward
    assert compute_bounds(CITIES + [CITIES[2], CITIES[2]]) == forward
    assert compute_bounds([CITIES[1], CITIES[1]]) == compute_bounds([CITIES[1]])


def test_compute_bounds_close_points_are_not_degenerate():
    a = Coordinate(-26.2041, 28.0473)
    b = Coordinate(-26.2041, 28.0474)

    camera = compute_bounds([a, b])

    assert isinstance(camera, BoundsCamera)
    assert camera.north_east.latitude - camera.south_west.latitude >= settings.min_bounds_span_degrees
    assert camera.north_east.longitude - camera.south_west.longitude >= settings.min_bounds_span_degrees
    assert camera.contains(a) and camera.contains(b)


def test_compute_bounds_ignores_out_of_region_and_non_finite_points():
    noisy = CITIES + [Coordinate(51.5, -0.12), Coordinate(math.nan, 20.0), Coordinate(0.0, 0.0)]

    assert compute_bounds(noisy) == compute_bounds(CITIES)
    assert len(filter_reasonable(noisy)) == len(CITIES)


def test_zoom_for_span_table():
    assert zoom_for_span(0.005) == 13
    assert zoom_for_span(0.03) == 11
    assert zoom_for_span(0.07) == 9
    assert zoom_for_span(0.3) == 7
    assert zoom_for_span(1.0) == 6
    assert zoom_for_span(10.0) == 5
