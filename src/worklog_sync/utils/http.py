"""Shared async HTTP plumbing for the Clockify, Jira and Tempo clients."""

import asyncio
import logging
from typing import Any

import httpx

from worklog_sync.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

RETRY_DELAY_SECONDS = 2
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "DELETE"})


class ApiClient:
    """Base class wrapping an ``httpx.AsyncClient`` behind a rate limiter."""

    BASE_URL = ""

    def __init__(
        self,
        base_url: str | None = None,
        headers: dict[str, str] | None = None,
        rate_limiter: RateLimiter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: API base URL. Defaults to the class BASE_URL.
            headers: Default request headers.
            rate_limiter: Limiter awaited before every request.
            transport: Custom httpx transport (used by tests).
            **kwargs: Additional arguments passed to httpx.AsyncClient.
        """
        self.rate_limiter = rate_limiter or RateLimiter.for_clockify_api()
        self.client = httpx.AsyncClient(
            base_url=base_url or self.BASE_URL,
            headers=headers,
            timeout=30.0,
            transport=transport,
            **kwargs,
        )

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request without rate limiting, retrying idempotent calls once.

        Raises:
            httpx.HTTPStatusError: If the final response is an error status.
            httpx.TransportError: If the network fails twice.
        """
        retry = method.upper() in IDEMPOTENT_METHODS
        try:
            response = await self.client.request(method, url, **kwargs)
            if retry and response.status_code >= 500:
                logger.warning(f"Server error {response.status_code}, retrying once...")
                await asyncio.sleep(RETRY_DELAY_SECONDS)
                response = await self.client.request(method, url, **kwargs)
        except httpx.TransportError:
            if not retry:
                raise
            logger.warning("Network error, retrying once...")
            await asyncio.sleep(RETRY_DELAY_SECONDS)
            response = await self.client.request(method, url, **kwargs)

        response.raise_for_status()
        return response

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Wait for the rate limiter, then send the request."""
        await self.rate_limiter.wait_if_needed()
        return await self._send(method, url, **kwargs)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "ApiClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()
