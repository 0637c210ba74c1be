"""Application options – RemoteOptionSearch, the searchable picker model.

The picker is lazy: nothing is requested until :meth:`RemoteOptionSearch.open`
is called.  Search text is debounced and each emitted term restarts an
:class:`IncrementalLoader` for ``(endpoint, term)``.  The selection belongs to
the caller: the picker reads :attr:`value` and reports changes through
``on_change``; the caller is expected to write the new selection back.
"""
from __future__ import annotations

from typing import Any, Callable, Sequence

from resops.application.loading import Debouncer, IncrementalLoader, LoadState, ScrollPosition
from resops.application.options.option import RemoteOption, format_option, merge_with_selection
from resops.application.pagination import PageFetcher, PageQuery
from resops.config.settings import ResopsSettings
from resops.observability.logging import get_logger

_log = get_logger(__name__)


class RemoteOptionSearch:
    def __init__(
        self,
        fetcher: PageFetcher[Any],
        endpoint: str,
        *,
        value: Sequence[str] = (),
        on_change: Callable[[list[str]], None] | None = None,
        multi: bool = True,
        debounce_ms: int | None = None,
        limit: int | None = None,
        format_fn: Callable[[Any], RemoteOption] = format_option,
        settings: ResopsSettings | None = None,
    ) -> None:
        settings = settings or ResopsSettings()
        if debounce_ms is None:
            debounce_ms = settings.picker_debounce_ms
        if limit is None:
            limit = settings.picker_page_size
        self.endpoint = endpoint
        self.value: list[str] = list(value)
        self.multi = multi
        self._on_change = on_change
        self._format = format_fn
        self._loader: IncrementalLoader[Any] = IncrementalLoader(
            fetcher, limit=limit, threshold_px=settings.scroll_threshold_px
        )
        self._debouncer: Debouncer[str] = Debouncer(debounce_ms, self._search_settled)
        self._is_open = False
        self._search = ""

    # -- read side -----------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def search(self) -> str:
        return self._search

    @property
    def loader(self) -> IncrementalLoader[Any]:
        return self._loader

    @property
    def is_loading(self) -> bool:
        return self._loader.state is LoadState.LOADING

    @property
    def fetched_options(self) -> list[RemoteOption]:
        return [self._format(item) for item in self._loader.items]

    @property
    def options(self) -> list[RemoteOption]:
        return merge_with_selection(self.fetched_options, self.value)

    def is_selected(self, value: str) -> bool:
        return value in self.value

    def label_for(self, value: str) -> str:
        for option in self.options:
            if option.value == value:
                return option.label
        return value

    def display_text(self, placeholder: str = "Select options...") -> str:
        if not self.value:
            return placeholder
        if len(self.value) == 1:
            return self.label_for(self.value[0])
        return f"{len(self.value)} selected"

    # -- popover lifecycle ---------------------------------------------------

    async def open(self) -> None:
        if self._is_open:
            return
        self._is_open = True
        await self._loader.set_query(self._query(self._search))

    def close(self) -> None:
        """Close the popover; the search text is cleared, the selection kept."""
        self._is_open = False
        self._debouncer.cancel()
        self._search = ""

    def dispose(self) -> None:
        self.close()
        self._debouncer.close()
        self._loader.close()

    # -- search and paging ---------------------------------------------------

    def set_search(self, text: str) -> None:
        self._search = text
        if self._is_open:
            self._debouncer.push(text)

    async def fetch_more(self) -> bool:
        if not self._is_open:
            return False
        return await self._loader.fetch_next()

    async def on_scroll(self, position: ScrollPosition) -> bool:
        if not self._is_open:
            return False
        return await self._loader.on_scroll(position)

    async def settle(self) -> None:
        """Wait for a debounced search that has already fired to finish loading."""
        await self._debouncer.drain()

    def _query(self, search: str) -> PageQuery:
        return PageQuery(endpoint=self.endpoint, search=search)

    async def _search_settled(self, text: str) -> None:
        if not self._is_open:
            return
        query = self._query(text)
        if query == self._loader.query and self._loader.state is not LoadState.ERROR:
            return
        _log.debug("options.search", endpoint=self.endpoint, search=query.search)
        await self._loader.set_query(query)

    # -- selection -----------------------------------------------------------

    def toggle(self, value: str) -> list[str]:
        """Select or deselect *value*.

        Multi-select flips membership; single-select replaces the selection
        and closes the picker.
        """
        if self.multi:
            if value in self.value:
                selection = [v for v in self.value if v != value]
            else:
                selection = [*self.value, value]
        else:
            selection = [value]
            self.close()
        self._emit(selection)
        return selection

    def remove(self, value: str) -> list[str]:
        selection = [v for v in self.value if v != value]
        self._emit(selection)
        return selection

    def clear(self) -> list[str]:
        self._emit([])
        return []

    def _emit(self, selection: list[str]) -> None:
        if self._on_change is not None:
            self._on_change(selection)


__all__ = ["RemoteOptionSearch"]
