"""Data access helpers for loading and normalising office records."""

from __future__ import annotations

import csv
import functools
import logging
import re
import zipfile
from pathlib import Path
from typing import Any, Iterable, Optional

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ..config import settings
from ..models.domain import AdminContact, Coordinate, Office, OfficeCategory, Representative
from ..services.geospatial import is_valid_coordinate
from .nocodb_client import NocoDBClient, OfficeDataUnavailable
from .sample import SAMPLE_ROWS

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[,\s]+")


def _text(row: dict[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = row.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def parse_lat_lon(value: Any) -> Optional[Coordinate]:
    """Parse "lat, lon" or "lat lon" into a coordinate; None when unparseable or out of range."""

    if value is None:
        return None
    cleaned = str(value).strip()
    if not cleaned:
        return None
    parts = [part for part in _SEPARATORS.split(cleaned) if part]
    if len(parts) < 2:
        logger.warning("Could not parse lat/lon from %r", value)
        return None
    try:
        lat, lon = float(parts[0]), float(parts[1])
    except ValueError:
        logger.warning("Could not parse lat/lon from %r", value)
        return None
    coordinate = Coordinate(lat, lon)
    if not is_valid_coordinate(coordinate):
        logger.warning("Discarding out-of-range lat/lon %r", value)
        return None
    return coordinate


def determine_category(row: dict[str, Any]) -> OfficeCategory:
    part = _text(row, "Part") or ""
    if "main" in part.lower():
        return OfficeCategory.MAIN_OFFICE
    if _text(row, "Province"):
        return OfficeCategory.PROVINCIAL_OFFICE
    if _text(row, "MP"):
        return OfficeCategory.MP_OFFICE
    return OfficeCategory.BRANCH_OFFICE


def to_office(row: dict[str, Any]) -> Optional[Office]:
    """Map one raw table row to an office; rows without a usable coordinate give None."""

    coordinate = parse_lat_lon(row.get("Latlon") or row.get("latlon"))
    if coordinate is None:
        return None
    office_id = _text(row, "Id", "id")
    if office_id is None:
        logger.warning("Skipping office row without an id: %s", _text(row, "PcoName", "pcoName"))
        return None

    representatives: tuple[Representative, ...] = ()
    mp_name = _text(row, "MP Name", "MPName", "MP")
    if mp_name:
        representatives = (
            Representative(
                name=mp_name,
                image=_text(row, "MP Image", "MPImage"),
                link=_text(row, "MP Link", "MPLink"),
            ),
        )

    admin = AdminContact(
        person=_text(row, "AdminPerson"),
        phone=_text(row, "AdminPhone"),
        email=_text(row, "AdminEmail"),
        details=_text(row, "AdministratorDetails"),
    )

    return Office(
        office_id=office_id,
        name=_text(row, "PcoName", "pcoName") or "Unknown Office",
        coordinate=coordinate,
        address=_text(row, "Address") or "No address provided",
        category=determine_category(row),
        province=_text(row, "Province"),
        party=_text(row, "Party", "MP Select", "mpSelect"),
        part=_text(row, "Part"),
        representatives=representatives,
        admin=admin if any((admin.person, admin.phone, admin.email, admin.details)) else None,
        raw=dict(row),
    )


def transform_rows(rows: Iterable[dict[str, Any]]) -> tuple[Office, ...]:
    offices: list[Office] = []
    skipped = 0
    for row in rows:
        office = to_office(row)
        if office is None:
            skipped += 1
            continue
        offices.append(office)
    if skipped:
        logger.info("Skipped %d office rows without usable coordinates", skipped)
    return tuple(offices)


def _read_rows_from_file(path: Path) -> list[dict[str, Any]]:
    if not path.exists():
        raise FileNotFoundError(f"Office file not found: {path}")

    if path.suffix.lower() == ".xlsx":
        wb = load_workbook(path, data_only=True, read_only=True)
        try:
            rows = wb.active.iter_rows(values_only=True)
            header = next(rows, None)
            if header is None:
                raise ValueError(f"Office workbook '{path}' is empty.")
            names = [str(cell).strip() if cell is not None else "" for cell in header]
            return [dict(zip(names, values)) for values in rows if any(v is not None for v in values)]
        finally:
            wb.close()

    with path.open(mode="r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise ValueError(f"Office file '{path}' is missing a header row.")
        return list(reader)


def fetch_offices(client: NocoDBClient | None = None, source: Path | None = None) -> tuple[Office, ...]:
    """Fetch offices from NocoDB, a local export or the built-in sample, in that order.

    Raises:
        OfficeDataUnavailable: the configured source could not be read.
    """

    if client is not None or (settings.nocodb_base_id and settings.nocodb_table_id):
        rows = (client or NocoDBClient()).list_rows()
        return transform_rows(rows)

    path = source or settings.offices_file
    if path is not None:
        try:
            rows = _read_rows_from_file(path)
        except (OSError, ValueError, csv.Error, zipfile.BadZipFile, InvalidFileException) as exc:
            raise OfficeDataUnavailable(f"Unable to read office file {path}: {exc}") from exc
        logger.info("Loaded %d office rows from %s", len(rows), path)
        return transform_rows(rows)

    logger.warning("NocoDB configuration missing. Using sample office data.")
    return transform_rows(SAMPLE_ROWS)


@functools.lru_cache(maxsize=1)
def load_offices() -> tuple[Office, ...]:
    """Cached office list shared by the API; cleared on refresh."""
    return fetch_offices()


def clear_offices_cache() -> None:
    load_offices.cache_clear()
