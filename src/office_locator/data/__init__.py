"""Office data sources."""

from .nocodb_client import NocoDBClient, OfficeDataUnavailable
from .offices_repository import clear_offices_cache, fetch_offices, load_offices, to_office

__all__ = [
    "NocoDBClient",
    "OfficeDataUnavailable",
    "clear_offices_cache",
    "fetch_offices",
    "load_offices",
    "to_office",
]
