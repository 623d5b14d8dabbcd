"""HTTP client for reading office rows from a NocoDB table."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import settings

logger = logging.getLogger(__name__)


class OfficeDataUnavailable(RuntimeError):
    """Raised when office records cannot be fetched from any source."""


class NocoDBClient:
    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        base_id: str | None = None,
        table_id: str | None = None,
        timeout: float | None = None,
        page_size: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.nocodb_url).rstrip("/")
        self.token = token if token is not None else settings.nocodb_token
        self.base_id = base_id or settings.nocodb_base_id
        self.table_id = table_id or settings.nocodb_table_id
        if not self.base_id or not self.table_id:
            raise ValueError("NocoDB base id and table id must both be configured.")
        self.timeout = timeout if timeout is not None else settings.nocodb_timeout_seconds
        self.page_size = page_size or settings.nocodb_page_size
        self._transport = transport

    @property
    def rows_url(self) -> str:
        return f"{self.base_url}/api/v1/db/data/noco/{self.base_id}/{self.table_id}"

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            headers={"xc-token": self.token},
            transport=self._transport,
        )

    def list_rows(self) -> list[dict[str, Any]]:
        """Return every row of the table, following NocoDB's offset paging."""
        rows: list[dict[str, Any]] = []
        offset = 0
        with self._get_client() as client:
            while True:
                params = {"offset": offset, "limit": self.page_size}
                try:
                    response = client.get(self.rows_url, params=params)
                    response.raise_for_status()
                    payload = response.json()
                except httpx.HTTPStatusError as exc:
                    raise OfficeDataUnavailable(
                        f"NocoDB returned HTTP {exc.response.status_code} for {self.rows_url}"
                    ) from exc
                except httpx.HTTPError as exc:
                    raise OfficeDataUnavailable(f"Failed to reach NocoDB at {self.base_url}: {exc}") from exc
                except ValueError as exc:
                    raise OfficeDataUnavailable("NocoDB response was not valid JSON.") from exc

                page = payload.get("list") if isinstance(payload, dict) else None
                if not isinstance(page, list):
                    raise OfficeDataUnavailable("NocoDB response missing 'list'.")
                rows.extend(row for row in page if isinstance(row, dict))

                page_info = payload.get("pageInfo") or {}
                if page_info.get("isLastPage", True) or not page:
                    break
                offset += len(page)
        logger.info("Fetched %d office rows from NocoDB", len(rows))
        return rows
