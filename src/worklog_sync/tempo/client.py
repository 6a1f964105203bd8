"""Tempo REST API client."""

import logging
from datetime import date
from typing import Any

import httpx

from worklog_sync.tempo.models import TempoWorklog, TempoWorklogPayload
from worklog_sync.utils import RateLimiter, StorageManager
from worklog_sync.utils.http import ApiClient
from worklog_sync.utils.pagination import CursorPage, fetch_cursor_paged

logger = logging.getLogger(__name__)


class TempoClient(ApiClient):
    """Async client for the Tempo REST API v4."""

    BASE_URL = "https://api.tempo.io/4"

    def __init__(
        self,
        account_id: str,
        api_token: str | None = None,
        storage: StorageManager | None = None,
        rate_limiter: RateLimiter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Tempo client.

        Args:
            account_id: Jira account ID whose worklogs are read and written.
            api_token: Tempo API token. If None, will try to load from storage.
            storage: StorageManager instance used to look up the token.
            rate_limiter: Limiter shared by every Tempo call.
            transport: Custom httpx transport (used by tests).

        Raises:
            ValueError: If no API token is available.
        """
        if not api_token:
            api_token = (storage or StorageManager()).get_token("tempo")
        if not api_token:
            raise ValueError("Tempo API token not provided or found in storage")

        self.account_id = account_id
        super().__init__(
            headers={"Authorization": f"Bearer {api_token}"},
            rate_limiter=rate_limiter,
            transport=transport,
        )

    async def _fetch_page(self, url: str) -> CursorPage[TempoWorklog]:
        response = await self._send("GET", url)
        data = response.json()
        items = [TempoWorklog(**item) for item in data.get("results", [])]
        return CursorPage(items, data.get("metadata", {}).get("next"))

    async def list_worklogs(self, start_date: date, end_date: date) -> list[TempoWorklog]:
        """List the account's worklogs between two dates (inclusive).

        Raises:
            httpx.HTTPError: If API request fails.
        """
        first = (
            f"{self.BASE_URL}/worklogs/user/{self.account_id}"
            f"?from={start_date.isoformat()}&to={end_date.isoformat()}"
        )
        worklogs = await fetch_cursor_paged(self._fetch_page, first, self.rate_limiter)
        logger.debug(f"Fetched {len(worklogs)} Tempo worklogs for {start_date}..{end_date}")
        return worklogs

    async def create_worklog(self, payload: TempoWorklogPayload) -> int:
        """Create a worklog.

        Returns:
            The new Tempo worklog ID.

        Raises:
            httpx.HTTPError: If API request fails.
        """
        response = await self._request("POST", "/worklogs", json=payload.to_api_dict())
        result: dict[str, Any] = response.json()
        return result["tempoWorklogId"]

    async def delete_worklog(self, worklog_id: int) -> None:
        """Delete a worklog.

        Raises:
            httpx.HTTPError: If API request fails.
        """
        await self._request("DELETE", f"/worklogs/{worklog_id}")

    async def __aenter__(self) -> "TempoClient":
        """Async context manager entry."""
        return self
