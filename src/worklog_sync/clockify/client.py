"""Clockify API client."""

import logging
from datetime import date
from typing import Any

import httpx

from worklog_sync.clockify.models import (
    ClockifyProject,
    ClockifyTask,
    ClockifyTimeEntry,
    ClockifyUser,
    ClockifyWorkspace,
)
from worklog_sync.utils import RateLimiter, StorageManager
from worklog_sync.utils.http import ApiClient
from worklog_sync.utils.pagination import fetch_offset_paged

logger = logging.getLogger(__name__)

PAGE_SIZE = 50


class ClockifyClient(ApiClient):
    """Async client for the Clockify REST API."""

    BASE_URL = "https://api.clockify.me/api/v1"

    def __init__(
        self,
        api_key: str | None = None,
        storage: StorageManager | None = None,
        rate_limiter: RateLimiter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Clockify client.

        Args:
            api_key: Clockify API key. If None, will try to load from storage.
            storage: StorageManager instance used to look up the API key.
            rate_limiter: Limiter shared by every Clockify call.
            transport: Custom httpx transport (used by tests).

        Raises:
            ValueError: If no API key is available.
        """
        if not api_key:
            api_key = (storage or StorageManager()).get_token("clockify")
        if not api_key:
            raise ValueError("Clockify API key not provided or found in storage")

        self.api_key = api_key
        super().__init__(
            headers={"X-Api-Key": self.api_key},
            rate_limiter=rate_limiter or RateLimiter.for_clockify_api(),
            transport=transport,
        )

    async def _get_paged(self, url: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """Fetch all pages of a page-number paged listing."""

        async def fetch_page(page: int, page_size: int) -> list[dict[str, Any]]:
            query = dict(params or {})
            query["page"] = page
            query["page-size"] = page_size
            response = await self._send("GET", url, params=query)
            return response.json()

        return await fetch_offset_paged(fetch_page, PAGE_SIZE, self.rate_limiter)

    async def get_current_user(self) -> ClockifyUser:
        """Get current authenticated user.

        Raises:
            httpx.HTTPError: If API request fails.
        """
        response = await self._request("GET", "/user")
        return ClockifyUser(**response.json())

    async def list_workspaces(self) -> list[ClockifyWorkspace]:
        """List all workspaces the user has access to."""
        response = await self._request("GET", "/workspaces")
        return [ClockifyWorkspace(**item) for item in response.json()]

    async def list_projects(self, workspace_id: str) -> list[ClockifyProject]:
        """List all projects in a workspace.

        Raises:
            httpx.HTTPError: If API request fails.
        """
        data = await self._get_paged(f"/workspaces/{workspace_id}/projects")
        return [ClockifyProject(**item) for item in data]

    async def list_tasks(self, workspace_id: str, project_id: str) -> list[ClockifyTask]:
        """List all tasks in a project.

        Raises:
            httpx.HTTPError: If API request fails.
        """
        data = await self._get_paged(f"/workspaces/{workspace_id}/projects/{project_id}/tasks")
        return [ClockifyTask(**item) for item in data]

    async def list_all_tasks(self, workspace_id: str) -> list[ClockifyTask]:
        """List the tasks of every project in a workspace."""
        tasks: list[ClockifyTask] = []
        for project in await self.list_projects(workspace_id):
            tasks.extend(await self.list_tasks(workspace_id, project.id))
        return tasks

    async def get_time_entries(
        self,
        workspace_id: str,
        user_id: str,
        start_date: date,
        end_date: date,
    ) -> list[ClockifyTimeEntry]:
        """Get completed time entries for a user.

        Args:
            workspace_id: Workspace ID.
            user_id: User ID.
            start_date: First day of the range (inclusive).
            end_date: Last day of the range (inclusive).

        Returns:
            List of time entries.

        Raises:
            httpx.HTTPError: If API request fails.
        """
        params = {
            "start": f"{start_date.isoformat()}T00:00:00Z",
            "end": f"{end_date.isoformat()}T23:59:59Z",
            "in-progress": "false",
        }
        data = await self._get_paged(
            f"/workspaces/{workspace_id}/user/{user_id}/time-entries",
            params=params,
        )
        entries = [ClockifyTimeEntry(**item) for item in data]
        logger.debug(f"Fetched {len(entries)} Clockify entries for {start_date}..{end_date}")
        return entries

    async def get_running_entry(self, workspace_id: str, user_id: str) -> ClockifyTimeEntry | None:
        """Get the currently running time entry, if any."""
        response = await self._request(
            "GET",
            f"/workspaces/{workspace_id}/user/{user_id}/time-entries",
            params={"in-progress": "true"},
        )
        data = response.json()
        return ClockifyTimeEntry(**data[0]) if data else None

    async def __aenter__(self) -> "ClockifyClient":
        """Async context manager entry."""
        return self
