"""Application pagination – InMemoryPageSource, the reference backing store.

Evaluates a :class:`PageRequest` against a list of rows the same way the
list endpoints do: equality for single-choice filters, membership for
multi-choice filters, case-insensitive substring search over the configured
columns, then sort, skip ``(page-1)*limit`` rows and take ``limit``.
``has_more`` is ``True`` exactly when the page came back full.
"""
from __future__ import annotations

from typing import Any, Callable, Generic, Sequence, TypeVar

from resops.application.filters import FieldKind
from resops.application.pagination.page import PageResponse
from resops.application.pagination.page_request import PageQuery, PageRequest, SortDirection

T = TypeVar("T")


def _as_dict(row: Any) -> dict[str, Any]:
    return row if isinstance(row, dict) else vars(row)


def _matches_member(value: Any, members: frozenset[str]) -> bool:
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(str(v) in members for v in value)
    return value is not None and str(value) in members


class InMemoryPageSource(Generic[T]):
    """PageFetcher over an in-memory row list (tests, fixtures, demos)."""

    def __init__(
        self,
        rows: Sequence[T],
        *,
        search_columns: Sequence[str] = ("name",),
        row_fn: Callable[[T], dict[str, Any]] | None = None,
    ) -> None:
        self.rows: list[T] = list(rows)
        self._search_columns = tuple(search_columns)
        self._row_fn = row_fn or _as_dict
        self.requests: list[PageRequest] = []

    def _matches(self, row: T, query: PageQuery) -> bool:
        d = self._row_fn(row)
        for key, value in query.scope:
            if str(d.get(key)) != value:
                return False
        if query.filters is not None:
            for f in query.filters.schema:
                value = query.filters[f.name]
                if f.kind is FieldKind.SINGLE and value is not None:
                    if str(d.get(f.column_name)) != value:
                        return False
                elif f.kind is FieldKind.MULTI and value:
                    if not _matches_member(d.get(f.column_name), value):
                        return False
        term = query.search_text.lower()
        if term:
            return any(term in str(d.get(c) or "").lower() for c in self._search_columns)
        return True

    def _select(self, query: PageQuery) -> list[T]:
        results = [row for row in self.rows if self._matches(row, query)]
        if query.sort is not None:
            column = query.sort.field

            def sort_key(row: T) -> tuple[bool, Any]:
                value = self._row_fn(row).get(column)
                return (value is None, "" if value is None else value)

            results.sort(
                key=sort_key,
                reverse=query.sort.direction is SortDirection.DESC,
            )
        return results

    async def fetch(self, request: PageRequest) -> PageResponse[T]:
        self.requests.append(request)
        results = self._select(request.query)
        page = results[request.offset: request.offset + request.limit]
        return PageResponse(data=page, has_more=len(page) == request.limit)

    async def count(self, query: PageQuery) -> int:
        """Total matches for *query*; a separate, more expensive operation."""
        return len(self._select(query))


__all__ = ["InMemoryPageSource"]
