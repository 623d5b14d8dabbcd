"""Address lookup against a Nominatim-compatible search endpoint."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..config import settings
from ..models.domain import Coordinate

logger = logging.getLogger(__name__)


class GeocodeError(RuntimeError):
    """Raised when the address lookup itself fails (as opposed to finding nothing)."""


class Geocoder:
    def __init__(
        self,
        base_url: str | None = None,
        country_codes: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.geocoder_url
        self.country_codes = country_codes if country_codes is not None else settings.geocoder_country_codes
        self.user_agent = user_agent or settings.geocoder_user_agent
        self.timeout = timeout if timeout is not None else settings.geocoder_timeout_seconds
        self._transport = transport

    def lookup(self, address: str) -> Optional[Coordinate]:
        """Resolve a free-text address to its best match, or None when nothing matches."""
        query = (address or "").strip()
        if not query:
            return None

        params = {"q": query, "format": "jsonv2", "limit": 1}
        if self.country_codes:
            params["countrycodes"] = self.country_codes

        with httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        ) as client:
            try:
                response = client.get(self.base_url, params=params)
                response.raise_for_status()
                results = response.json()
            except httpx.HTTPError as exc:
                raise GeocodeError(f"Address lookup failed: {exc}") from exc
            except ValueError as exc:
                raise GeocodeError("Address lookup returned invalid JSON.") from exc

        if not isinstance(results, list) or not results:
            logger.info("No geocoding result for %r", query)
            return None
        try:
            first = results[0]
            return Coordinate(float(first["lat"]), float(first["lon"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise GeocodeError("Address lookup returned an unexpected payload.") from exc
