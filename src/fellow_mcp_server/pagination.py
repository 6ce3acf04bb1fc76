"""Cursor pagination over Fellow list endpoints.

List endpoints return either a nested envelope,

    {"notes": {"data": [...], "page_info": {"cursor": "..."}}}

or the same fields at the response root. `normalize_page` reduces both to
a `Page`, and `PaginatedAggregator` walks pages until the cursor runs out
or the page ceiling is reached.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import BadRequestError
from .executor import CallExecutor, Sleep
from .transport import Method, RequestDescriptor

logger = logging.getLogger(__name__)

PAGE_SIZE_RANGE = (1, 50)
MAX_PAGES_RANGE = (1, 20)


@dataclass(frozen=True)
class Page:
    items: List[Any]
    next_cursor: Optional[str]


@dataclass
class AggregatedResult:
    """Items collected across pages, in fetch order."""

    items: List[Any] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _cursor_of(section: Dict[str, Any]) -> Optional[str]:
    cursor = _as_dict(section.get("page_info")).get("cursor")
    return cursor or None


def normalize_page(body: Any, envelope_key: str) -> Page:
    """Extract items and the next cursor from one page response.

    The nested shape (`body[envelope_key]`) is probed first and the flat
    shape second, independently for items and cursor.

    Example:
        >>> normalize_page({"data": [1], "page_info": {"cursor": "c"}}, "notes")
        Page(items=[1], next_cursor='c')
    """

    root = _as_dict(body)
    nested = _as_dict(root.get(envelope_key))

    items = nested.get("data")
    if not isinstance(items, list):
        items = root.get("data")
    if not isinstance(items, list):
        items = []

    cursor = _cursor_of(nested) or _cursor_of(root)
    return Page(items=list(items), next_cursor=cursor)


def _check_bounds(name: str, value: int, bounds: tuple[int, int]) -> None:
    low, high = bounds
    if not low <= value <= high:
        raise BadRequestError(
            f"'{name}' must be between {low} and {high}", {name: value}
        )


class PaginatedAggregator:
    """Collects items from a cursor-paginated endpoint.

    Args:
        executor: Executor used for every page fetch.
        page_delay_ms: Pause between successive page fetches.
        sleep: Coroutine function taking seconds; defaults to asyncio.sleep.
    """

    def __init__(
        self,
        executor: CallExecutor,
        *,
        page_delay_ms: int = 350,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._executor = executor
        self._page_delay_ms = page_delay_ms
        self._sleep = sleep

    async def aggregate(
        self,
        endpoint: str,
        body_template: Dict[str, Any],
        *,
        envelope_key: str,
        page_size: int,
        max_pages: int,
        method: Method = "POST",
    ) -> AggregatedResult:
        """Fetch up to `max_pages` pages and concatenate their items.

        Args:
            endpoint: API path, e.g. "/notes".
            body_template: Filters and include flags sent with every page.
            envelope_key: Key holding the nested envelope, e.g. "notes".
            page_size: Items requested per page (1-50).
            max_pages: Page ceiling (1-20). Hitting it is not an error.
            method: HTTP method of the list endpoint.

        Raises:
            BadRequestError: If `page_size` or `max_pages` is out of range.
            TransportError, UpstreamUnavailableError: From any page fetch;
                items of earlier pages are discarded.
        """

        _check_bounds("page_size", page_size, PAGE_SIZE_RANGE)
        _check_bounds("max_pages", max_pages, MAX_PAGES_RANGE)

        result = AggregatedResult()
        cursor: Optional[str] = None
        for index in range(max_pages):
            pagination: Dict[str, Any] = {"page_size": page_size}
            if cursor is not None:
                pagination["cursor"] = cursor
            body = {**body_template, "pagination": pagination}

            payload = await self._executor.execute(
                RequestDescriptor(method, endpoint, body)
            )
            page = normalize_page(payload, envelope_key)
            result.items.extend(page.items)
            logger.debug(
                "%s page %d: %d items, more=%s",
                endpoint,
                index + 1,
                len(page.items),
                page.next_cursor is not None,
            )

            cursor = page.next_cursor
            if cursor is None:
                break
            if index < max_pages - 1:
                await self._sleep(self._page_delay_ms / 1000)

        return result
