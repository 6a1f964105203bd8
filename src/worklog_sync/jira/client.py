"""Jira Cloud REST API client."""

import logging

import httpx

from worklog_sync.jira.models import JiraIssue
from worklog_sync.utils import RateLimiter
from worklog_sync.utils.http import ApiClient

logger = logging.getLogger(__name__)


class JiraClient(ApiClient):
    """Async client for the Jira REST API v3."""

    def __init__(
        self,
        base_url: str,
        user: str,
        api_token: str,
        rate_limiter: RateLimiter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Jira client.

        Args:
            base_url: Site URL, e.g. https://mycompany.atlassian.net
            user: Account email used for basic authentication.
            api_token: Jira API token.
            rate_limiter: Limiter shared by every Jira call.
            transport: Custom httpx transport (used by tests).

        Raises:
            ValueError: If any credential is missing.
        """
        if not base_url or not user or not api_token:
            raise ValueError("Jira base URL, user and API token are required")

        super().__init__(
            base_url=f"{base_url.rstrip('/')}/rest/api/3",
            headers={"Accept": "application/json"},
            rate_limiter=rate_limiter,
            transport=transport,
            auth=(user, api_token),
        )
        self._issues: dict[str, JiraIssue | None] = {}
        self._account_id: str | None = None

    async def get_account_id(self) -> str:
        """Get the account ID of the authenticated user (cached).

        Raises:
            httpx.HTTPError: If API request fails.
        """
        if self._account_id is None:
            response = await self._request("GET", "/myself")
            self._account_id = response.json()["accountId"]
        return self._account_id

    async def get_issue(self, key: str) -> JiraIssue | None:
        """Get an issue by key, caching the result for this client's lifetime.

        Args:
            key: Issue key, e.g. "ABC-123".

        Returns:
            The issue, or None if Jira does not know the key.

        Raises:
            httpx.HTTPError: If API request fails for any other reason.
        """
        if key in self._issues:
            return self._issues[key]

        try:
            response = await self._request("GET", f"/issue/{key}")
        except httpx.HTTPStatusError as e:
            if e.response.status_code != 404:
                raise
            logger.warning(f"Jira issue {key} not found")
            self._issues[key] = None
            return None

        issue = JiraIssue(**response.json())
        self._issues[key] = issue
        return issue

    async def __aenter__(self) -> "JiraClient":
        """Async context manager entry."""
        return self
