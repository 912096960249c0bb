"""Pagination engine for list endpoints that answer with a continuation token.

A paginated descriptor mixes in ``PaginatedEndpoint`` and declares its own
``limit`` and ``page_token`` fields. ``Paginator`` walks the pages::

    pages = client.paginate(GetHistoricalBars(["AAPL"], Timeframe.day()), page_size=500)
    async for bar in pages:
        ...

The token of each page is read by the descriptor (``next_page_token``), so
endpoints that name their continuation field differently can override it.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, AsyncIterator, Generic, List, Optional, TypeVar

from .core.errors import UnsupportedOperationError, ValidationError
from .logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 1000


class PaginatedEndpoint:
    """Mixin for descriptors carrying ``limit`` and ``page_token`` fields."""

    def with_page(self, limit: Optional[int], page_token: Optional[str]) -> Any:
        return dataclasses.replace(self, limit=limit, page_token=page_token)  # type: ignore[type-var]

    def next_page_token(self, response: Any) -> Optional[str]:
        token = getattr(response, "next_page_token", None)
        return token or None

    def page_items(self, response: Any) -> List[Any]:
        return list(response.items())


class PageState(str, Enum):
    NOT_STARTED = "not_started"
    HAS_TOKEN = "has_token"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    next_page_token: Optional[str] = None


class Paginator(Generic[T]):
    """Cursor over the pages of one paginated descriptor.

    An explicit ``limit`` on the descriptor is sent as is; ``page_size`` only
    fills in when the descriptor leaves ``limit`` unset. Once exhausted,
    ``next_page`` returns an empty list without issuing a request.
    """

    def __init__(self, client: Any, endpoint: Any, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        if not isinstance(endpoint, PaginatedEndpoint):
            raise UnsupportedOperationError(
                f"{type(endpoint).__name__} does not support pagination",
                context={"endpoint": type(endpoint).__name__},
            )
        if page_size < 1:
            raise ValidationError(f"page_size must be positive, got {page_size}")
        self._client = client
        self.endpoint = endpoint
        self.page_size = page_size
        self.state = PageState.NOT_STARTED
        self.page_token: Optional[str] = None

    @property
    def exhausted(self) -> bool:
        return self.state is PageState.EXHAUSTED

    def _configured(self, page_token: Optional[str]) -> Any:
        limit = self.endpoint.limit if self.endpoint.limit is not None else self.page_size
        return self.endpoint.with_page(limit, page_token)

    async def fetch_page(self, page_token: Optional[str] = None) -> Page[T]:
        """Fetch a single page for ``page_token`` without touching the cursor."""

        response = await self._client.execute(self._configured(page_token))
        return Page(self.endpoint.page_items(response), self.endpoint.next_page_token(response))

    async def next_page(self) -> List[T]:
        if self.state is PageState.EXHAUSTED:
            logger.debug("%s pagination already exhausted", type(self.endpoint).__name__)
            return []
        page = await self.fetch_page(self.page_token)
        self.page_token = page.next_page_token
        self.state = PageState.HAS_TOKEN if page.next_page_token else PageState.EXHAUSTED
        logger.debug(
            "%s page of %d items, state=%s", type(self.endpoint).__name__, len(page.items), self.state.value
        )
        return page.items

    async def __aiter__(self) -> AsyncIterator[T]:
        while not self.exhausted:
            for item in await self.next_page():
                yield item

    async def collect(self) -> List[T]:
        return [item async for item in self]
