import math

from office_locator.models.domain import Coordinate, Office, OfficeCategory
from office_locator.services.geospatial import haversine_km
from office_locator.services.nearest import nearest, rank_by_distance


def _office(oid: str, lat: float, lon: float) -> Office:
    return Office(
        office_id=oid,
        name=f"Office {oid}",
        coordinate=Coordinate(lat, lon),
        address="1 Main Road",
        category=OfficeCategory.BRANCH_OFFICE,
    )


ORIGIN = Coordinate(-26.2041, 28.0473)

OFFICES = [
    _office("CPT", -33.9249, 18.4241),
    _office("JHB", -26.2041, 28.0473),
    _office("DBN", -29.8587, 31.0218),
    _office("PTA", -25.7479, 28.2293),
    _office("BFN", -29.0852, 26.1596),
]


def test_nearest_returns_k_closest_in_order():
    result = nearest(ORIGIN, OFFICES, 3)

    assert [office.office_id for office in result] == ["JHB", "PTA", "BFN"]


def test_nearest_distances_are_non_decreasing():
    result = nearest(ORIGIN, OFFICES, 5)
    distances = [haversine_km(ORIGIN.latitude, ORIGIN.longitude, o.latitude, o.longitude) for o in result]

    assert len(result) == 5
    assert distances == sorted(distances)


def test_nearest_defaults_to_three():
    assert len(nearest(ORIGIN, OFFICES)) == 3


def test_nearest_k_bounds():
    assert nearest(ORIGIN, OFFICES, 0) == []
    assert nearest(ORIGIN, OFFICES, -2) == []
    assert len(nearest(ORIGIN, OFFICES, 50)) == len(OFFICES)


def test_nearest_skips_invalid_coordinates():
    offices = OFFICES + [_office("BAD", math.nan, 28.0), _office("WORSE", 120.0, 28.0)]

    result = nearest(ORIGIN, offices, 10)

    assert len(result) == len(OFFICES)
    assert all(office.office_id not in {"BAD", "WORSE"} for office in result)


def test_rank_by_distance_ties_keep_input_order():
    twins = [_office("A", -29.0, 26.0), _office("B", -29.0, 26.0), _office("C", -29.0, 26.0)]

    ranked = rank_by_distance(ORIGIN, twins)

    assert [item.office.office_id for item in ranked] == ["A", "B", "C"]
