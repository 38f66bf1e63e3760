"""Client-side cursor pagination.

The server only ever hands out a cursor for the *next* page. Going back is a
replay of a cursor remembered in :class:`CursorStack`, so a previous page is
always exactly the page that was shown before.
"""

from __future__ import annotations

import logging

from app.api.schemas import CursorPageResponse, CursorResponse
from app.client.contents_client import ContentsClient, ContentsClientError, ListParams

logger = logging.getLogger(__name__)


class CursorStack:
    """Visited cursors ``[None, c1, c2, ...]`` plus the index of the current page."""

    def __init__(self) -> None:
        self._cursors: list[CursorResponse | None] = [None]
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    @property
    def cursors(self) -> tuple[CursorResponse | None, ...]:
        return tuple(self._cursors)

    @property
    def current(self) -> CursorResponse | None:
        return self._cursors[self._index]

    @property
    def can_go_back(self) -> bool:
        return self._index > 0

    @property
    def previous(self) -> CursorResponse | None:
        if not self.can_go_back:
            raise IndexError("already at the first page")
        return self._cursors[self._index - 1]

    def reset(self) -> None:
        self._cursors = [None]
        self._index = 0

    def push(self, cursor: CursorResponse) -> None:
        """Drop any forward history past the current page, then step onto ``cursor``."""
        del self._cursors[self._index + 1 :]
        self._cursors.append(cursor)
        self._index += 1

    def step_back(self) -> CursorResponse | None:
        if not self.can_go_back:
            raise IndexError("already at the first page")
        self._index -= 1
        return self.current


class ContentPaginator:
    """Browse the catalog in cursor mode with next/previous navigation.

    Every operation fetches first and only then commits the new state, so a
    failed request leaves the filters, the stack and the last page untouched.
    """

    def __init__(self, client: ContentsClient, params: ListParams | None = None) -> None:
        self._client = client
        self._params = params or ListParams()
        self._stack = CursorStack()
        self._page: CursorPageResponse | None = None

    @property
    def params(self) -> ListParams:
        return self._params

    @property
    def stack(self) -> CursorStack:
        return self._stack

    @property
    def page(self) -> CursorPageResponse | None:
        return self._page

    @property
    def has_next(self) -> bool:
        page = self._page
        return page is not None and page.has_next and page.next_cursor is not None

    @property
    def has_previous(self) -> bool:
        return self._stack.can_go_back

    async def _fetch(self, params: ListParams, cursor: CursorResponse | None) -> CursorPageResponse:
        page = await self._client.list_contents(params, cursor=cursor)
        if not isinstance(page, CursorPageResponse):
            raise ContentsClientError("Expected a cursor page")
        return page

    async def load(self) -> CursorPageResponse:
        """(Re)fetch the page at the current cursor."""
        self._page = await self._fetch(self._params, self._stack.current)
        return self._page

    async def apply(self, params: ListParams) -> CursorPageResponse:
        """Switch filters/sort/search. Starts a new sequence from the first page."""
        page = await self._fetch(params, None)
        self._params = params
        self._stack.reset()
        self._page = page
        return page

    async def next(self) -> CursorPageResponse:
        if self._page is None or not self.has_next:
            raise IndexError("no next page")
        cursor = self._page.next_cursor
        assert cursor is not None
        page = await self._fetch(self._params, cursor)
        self._stack.push(cursor)
        self._page = page
        return page

    async def previous(self) -> CursorPageResponse:
        cursor = self._stack.previous
        page = await self._fetch(self._params, cursor)
        self._stack.step_back()
        self._page = page
        logger.debug("Replayed page %d", self._stack.index)
        return page

