"""Party and province filters for the office list."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from ..models.domain import Office

ALL = "all"
UNKNOWN = "Unknown"


def party_of(office: Office) -> str:
    return office.party or UNKNOWN


def province_of(office: Office) -> str:
    return office.province or UNKNOWN


def filter_offices(offices: Sequence[Office], party: str = ALL, province: str = ALL) -> tuple[Office, ...]:
    """Keep offices matching both filters, preserving input order."""

    filtered = tuple(offices)
    if party and party != ALL:
        filtered = tuple(office for office in filtered if party_of(office) == party)
    if province and province != ALL:
        filtered = tuple(office for office in filtered if province_of(office) == province)
    return filtered


def _ranked_options(counts: Counter[str]) -> list[dict]:
    ordered = sorted(counts, key=lambda label: (label == UNKNOWN, label.lower(), label))
    return [{"value": label, "count": counts[label]} for label in ordered]


def summarize_filters(offices: Sequence[Office]) -> dict:
    """Filter choices with office counts, alphabetical with "Unknown" last."""

    parties: Counter[str] = Counter(party_of(office) for office in offices)
    provinces: Counter[str] = Counter(province_of(office) for office in offices)
    return {
        "total": len(offices),
        "parties": _ranked_options(parties),
        "provinces": _ranked_options(provinces),
    }
