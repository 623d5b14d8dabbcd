from office_locator.models.domain import Coordinate, Office, OfficeCategory
from office_locator.services.filtering import filter_offices, summarize_filters


def _office(oid: str, party: str | None, province: str | None) -> Office:
    return Office(
        office_id=oid,
        name=f"Office {oid}",
        coordinate=Coordinate(-29.0, 26.0),
        address="1 Main Road",
        category=OfficeCategory.BRANCH_OFFICE,
        party=party,
        province=province,
    )


OFFICES = [
    _office("1", "DA", "Western Cape"),
    _office("2", "ANC", "Gauteng"),
    _office("3", None, "Gauteng"),
    _office("4", "DA", None),
    _office("5", "eff", "Free State"),
]


def test_filter_by_party_and_province_keeps_order():
    assert [o.office_id for o in filter_offices(OFFICES, party="DA")] == ["1", "4"]
    assert [o.office_id for o in filter_offices(OFFICES, province="Gauteng")] == ["2", "3"]
    assert [o.office_id for o in filter_offices(OFFICES, party="ANC", province="Gauteng")] == ["2"]
    assert [o.office_id for o in filter_offices(OFFICES, party="Unknown")] == ["3"]
    assert len(filter_offices(OFFICES)) == len(OFFICES)


def test_summarize_filters_sorts_unknown_last():
    summary = summarize_filters(OFFICES)

    assert summary["total"] == 5
    assert [item["value"] for item in summary["parties"]] == ["ANC", "DA", "eff", "Unknown"]
    assert summary["parties"][1]["count"] == 2
    assert [item["value"] for item in summary["provinces"]] == ["Free State", "Gauteng", "Western Cape", "Unknown"]
