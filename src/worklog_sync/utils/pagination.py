"""Helpers that fully materialize paged API collections."""

import logging
from typing import Awaitable, Callable, Generic, TypeVar

from worklog_sync.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CursorPage(Generic[T]):
    """One page of a cursor-paged collection."""

    def __init__(self, items: list[T], next_cursor: str | None = None) -> None:
        self.items = items
        self.next_cursor = next_cursor


async def fetch_offset_paged(
    fetch_page: Callable[[int, int], Awaitable[list[T]]],
    page_size: int,
    limiter: RateLimiter | None = None,
) -> list[T]:
    """Fetch every page of a page-number paged collection.

    Args:
        fetch_page: Coroutine function taking (page, page_size), pages start at 1.
        page_size: Number of items requested per page.
        limiter: Rate limiter awaited before each page request.

    Returns:
        All items in the order the pages returned them.
    """
    items: list[T] = []
    page = 1
    while True:
        if limiter is not None:
            await limiter.wait_if_needed()
        data = await fetch_page(page, page_size)
        items.extend(data)
        if len(data) < page_size:
            break
        page += 1

    logger.debug(f"Fetched {len(items)} items over {page} page(s)")
    return items


async def fetch_cursor_paged(
    fetch_page: Callable[[str], Awaitable[CursorPage[T]]],
    first: str,
    limiter: RateLimiter | None = None,
) -> list[T]:
    """Fetch every page of a cursor paged collection.

    Args:
        fetch_page: Coroutine function taking a URL or token and returning a page.
        first: Cursor of the first page.
        limiter: Rate limiter awaited before each page request.

    Returns:
        All items in the order the pages returned them.
    """
    items: list[T] = []
    visited: set[str] = set()
    cursor: str | None = first

    while cursor is not None:
        # Some APIs hand back the same "next" link forever.
        if cursor.lower() in visited:
            logger.warning(f"Pagination cursor repeated, stopping: {cursor}")
            break
        visited.add(cursor.lower())

        if limiter is not None:
            await limiter.wait_if_needed()
        page = await fetch_page(cursor)
        items.extend(page.items)
        cursor = page.next_cursor

    return items
