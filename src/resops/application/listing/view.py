"""Application listing – ListView, one filtered, sorted, incrementally loaded table.

Wires a :class:`FilterStagingGate`, an :class:`IncrementalLoader` and the
sort state together.  Applied-filter and sort changes re-query from page 1;
draft edits do not touch the loader.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, Sequence, TypeVar

from resops.application.filters import FilterSchema, FilterSet
from resops.application.loading import IncrementalLoader, LoadState, ScrollPosition
from resops.application.pagination import PageFetcher, PageQuery, Sort
from resops.application.preferences import ColumnDescriptor, ColumnLayout, ViewPreferencesStore
from resops.application.staging import FilterStagingGate
from resops.config.settings import ResopsSettings
from resops.observability.logging import bind_view, get_logger

T = TypeVar("T")

_log = get_logger(__name__)


class ListView(Generic[T]):
    def __init__(
        self,
        fetcher: PageFetcher[T],
        *,
        endpoint: str,
        schema: FilterSchema,
        view_id: str,
        preferences: ViewPreferencesStore | None = None,
        columns: Sequence[ColumnDescriptor] = (),
        sort: Sort | None = None,
        scope: Mapping[str, Any] | None = None,
        settings: ResopsSettings | None = None,
    ) -> None:
        settings = settings or ResopsSettings()
        self.view_id = view_id
        self._endpoint = endpoint
        self._scope = dict(scope or {})
        self._sort = sort
        self.loader: IncrementalLoader[T] = IncrementalLoader(
            fetcher,
            limit=settings.page_size,
            threshold_px=settings.scroll_threshold_px,
        )
        self.gate = FilterStagingGate(
            schema,
            view_id=view_id,
            preferences=preferences,
            debounce_ms=settings.search_debounce_ms,
            on_applied=self._on_applied,
        )
        if preferences is not None:
            self.columns = ColumnLayout.load(preferences, view_id, columns)
        else:
            self.columns = ColumnLayout(columns)

    @property
    def query(self) -> PageQuery:
        return PageQuery(
            endpoint=self._endpoint,
            filters=self.gate.applied,
            sort=self._sort,
            scope=self._scope,
        )

    @property
    def sort(self) -> Sort | None:
        return self._sort

    @property
    def items(self) -> list[T]:
        return self.loader.items

    @property
    def state(self) -> LoadState:
        return self.loader.state

    @property
    def has_pending(self) -> bool:
        return self.gate.has_pending

    async def mount(self) -> None:
        """Restore applied filters and load the first page."""
        bind_view(self.view_id)
        self.gate.mount()
        _log.debug("listing.mounted", endpoint=self._endpoint, active=self.gate.applied.is_active())
        await self.loader.set_query(self.query)

    async def set_sort(self, field: str) -> None:
        self._sort = self._sort.toggled(field) if self._sort is not None else Sort(field)
        await self._requery()

    async def load_more(self) -> bool:
        return await self.loader.fetch_next()

    async def on_scroll(self, position: ScrollPosition) -> bool:
        return await self.loader.on_scroll(position)

    async def retry(self) -> bool:
        return await self.loader.retry()

    def close(self) -> None:
        self.gate.close()
        self.loader.close()

    async def _on_applied(self, filters: FilterSet) -> None:  # noqa: ARG002
        await self._requery()

    async def _requery(self) -> None:
        query = self.query
        if query == self.loader.query and self.loader.state is not LoadState.ERROR:
            return
        await self.loader.set_query(query)


__all__ = ["ListView"]
