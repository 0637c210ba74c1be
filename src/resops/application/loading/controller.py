"""Application loading – IncrementalLoader.

Accumulates the pages of one :class:`PageQuery` and fetches the next page on
demand.  State machine::

    EMPTY ──set_query──▶ LOADING ──ok, has_more──▶ READY_FOR_MORE ──fetch_next──▶ LOADING
                            │   └──ok, no more──▶ IDLE
                            └──failure──▶ ERROR ──retry──▶ LOADING

``set_query`` resets to page 1 from any state.  A response whose query is no
longer the active one is dropped on arrival; the superseded request itself is
left to finish.  There is no request timeout: a fetch that never completes
keeps the loader in ``LOADING``.
"""
from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Generic, Hashable, TypeVar

from resops.application.loading.scroll import DEFAULT_THRESHOLD_PX, ScrollPosition, is_near_bottom
from resops.application.pagination import PageFetcher, PageQuery, PageRequest
from resops.observability.logging import get_logger

T = TypeVar("T")

_log = get_logger(__name__)


class LoadState(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    READY_FOR_MORE = "ready_for_more"
    IDLE = "idle"
    ERROR = "error"


def item_key(item: Any) -> Hashable:
    """Identity used to de-duplicate accumulated items (``id`` when present)."""
    if isinstance(item, Mapping):
        if item.get("id") is not None:
            return ("id", item["id"])
        return ("json", json.dumps(item, sort_keys=True, default=str))
    item_id = getattr(item, "id", None)
    if item_id is not None:
        return ("id", item_id)
    return ("obj", item)


class IncrementalLoader(Generic[T]):
    def __init__(
        self,
        fetcher: PageFetcher[T],
        *,
        limit: int = 20,
        key: Callable[[T], Hashable] = item_key,
        threshold_px: float = DEFAULT_THRESHOLD_PX,
        on_change: Callable[["IncrementalLoader[T]"], None] | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._limit = limit
        self._key = key
        self._threshold_px = threshold_px
        self._on_change = on_change
        self._query: PageQuery | None = None
        self._generation = 0
        self._items: list[T] = []
        self._seen: set[Hashable] = set()
        self._page = 0
        self._has_more = False
        self._state = LoadState.EMPTY
        self._error: BaseException | None = None
        self._failed: PageRequest | None = None
        self._closed = False

    # -- read side -----------------------------------------------------------

    @property
    def items(self) -> list[T]:
        return list(self._items)

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def query(self) -> PageQuery | None:
        return self._query

    @property
    def page(self) -> int:
        """Number of the last page appended to :attr:`items`."""
        return self._page

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def error(self) -> BaseException | None:
        return self._error

    @property
    def is_loading(self) -> bool:
        return self._state is LoadState.LOADING

    @property
    def closed(self) -> bool:
        return self._closed

    # -- commands ------------------------------------------------------------

    async def set_query(self, query: PageQuery) -> None:
        """Start (or restart) accumulation for *query* from page 1."""
        if self._closed:
            return
        self._generation += 1
        self._query = query
        self._items = []
        self._seen = set()
        self._page = 0
        self._has_more = False
        self._error = None
        self._failed = None
        await self._load(PageRequest(query, page=1, limit=self._limit))

    async def fetch_next(self) -> bool:
        """Load the next page; returns ``False`` when the trigger was dropped."""
        if self._closed or self._state is not LoadState.READY_FOR_MORE or self._query is None:
            return False
        await self._load(PageRequest(self._query, page=self._page + 1, limit=self._limit))
        return True

    async def retry(self) -> bool:
        """Re-issue the request that failed."""
        if self._closed or self._state is not LoadState.ERROR or self._failed is None:
            return False
        await self._load(self._failed)
        return True

    async def refresh(self) -> None:
        if self._query is not None:
            await self.set_query(self._query)

    async def on_scroll(self, position: ScrollPosition) -> bool:
        if not is_near_bottom(position, self._threshold_px):
            return False
        return await self.fetch_next()

    def close(self) -> None:
        """Tear down: responses still in flight are ignored from now on."""
        self._closed = True
        self._generation += 1

    # -- internals -----------------------------------------------------------

    def _is_current(self, generation: int, request: PageRequest) -> bool:
        return generation == self._generation and request.query == self._query

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self)

    async def _load(self, request: PageRequest) -> None:
        generation = self._generation
        self._state = LoadState.LOADING
        self._changed()
        try:
            response = await self._fetcher.fetch(request)
        except Exception as exc:
            if not self._is_current(generation, request):
                _log.debug("loader.stale_failure_ignored", endpoint=request.query.endpoint, page=request.page)
                return
            self._state = LoadState.ERROR
            self._error = exc
            self._failed = request
            _log.warning(
                "loader.page_failed",
                endpoint=request.query.endpoint,
                page=request.page,
                error=repr(exc),
            )
            self._changed()
            return

        if not self._is_current(generation, request):
            _log.debug("loader.stale_response_discarded", endpoint=request.query.endpoint, page=request.page)
            return

        added = 0
        for item in response.data:
            k = self._key(item)
            if k in self._seen:
                continue
            self._seen.add(k)
            self._items.append(item)
            added += 1
        self._page = request.page
        self._has_more = response.has_more
        self._error = None
        self._failed = None
        self._state = LoadState.READY_FOR_MORE if response.has_more else LoadState.IDLE
        _log.debug(
            "loader.page_loaded",
            endpoint=request.query.endpoint,
            page=request.page,
            received=len(response.data),
            added=added,
            has_more=response.has_more,
        )
        self._changed()


__all__ = ["IncrementalLoader", "LoadState", "item_key"]
