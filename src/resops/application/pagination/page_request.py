"""Application pagination – SortDirection, Sort, PageQuery, PageRequest.

Continuation is page-number based: the next request is ``page + 1`` for the
same :class:`PageQuery`.  Nothing is kept on the server between requests.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from enum import Enum
from typing import Any

from resops.application.filters import FilterSet
from resops.kernel.errors import ValidationError

MAX_PAGE_SIZE = 1000


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclasses.dataclass(frozen=True)
class Sort:
    """Single sort criterion."""
    field: str
    direction: SortDirection = SortDirection.ASC

    def toggled(self, field: str) -> "Sort":
        """Sort after a click on *field*'s header.

        Clicking the current column flips the direction; another column
        starts ascending.
        """
        if field == self.field:
            flipped = SortDirection.DESC if self.direction is SortDirection.ASC else SortDirection.ASC
            return Sort(field, flipped)
        return Sort(field, SortDirection.ASC)


@dataclasses.dataclass(frozen=True)
class PageQuery:
    """Identity of a logical list query: everything except the page number.

    ``scope`` holds fixed parameters of the view itself (``researchId`` for
    the linked-meetings panel); it accepts a mapping and is stored as sorted
    pairs so the query stays hashable.
    """

    endpoint: str
    filters: FilterSet | None = None
    sort: Sort | None = None
    search: str = ""
    scope: Any = ()

    def __post_init__(self) -> None:
        scope = self.scope.items() if isinstance(self.scope, Mapping) else self.scope
        object.__setattr__(self, "scope", tuple(sorted((str(k), str(v)) for k, v in scope)))
        object.__setattr__(self, "search", (self.search or "").strip())

    @property
    def search_text(self) -> str:
        if self.search:
            return self.search
        return self.filters.search.strip() if self.filters is not None else ""

    def with_filters(self, filters: FilterSet) -> "PageQuery":
        return dataclasses.replace(self, filters=filters)

    def with_sort(self, sort: Sort | None) -> "PageQuery":
        return dataclasses.replace(self, sort=sort)

    def with_search(self, search: str) -> "PageQuery":
        return dataclasses.replace(self, search=search)

    def to_query_params(self) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        if self.sort is not None:
            params.append(("sortBy", self.sort.field))
            params.append(("sortDir", self.sort.direction.value))
        if self.search_text:
            params.append(("search", self.search_text))
        params.extend(self.scope)
        if self.filters is not None:
            params.extend(self.filters.to_query_params(include_search=False))
        return params


@dataclasses.dataclass(frozen=True)
class PageRequest:
    """One page of a :class:`PageQuery` (1-based)."""
    query: PageQuery
    page: int = 1
    limit: int = 20

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("page must be >= 1", field="page")
        if self.limit < 1 or self.limit > MAX_PAGE_SIZE:
            raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}", field="limit")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def next(self) -> "PageRequest":
        return dataclasses.replace(self, page=self.page + 1)

    def to_query_params(self) -> list[tuple[str, str]]:
        return [
            ("page", str(self.page)),
            ("limit", str(self.limit)),
            *self.query.to_query_params(),
        ]


__all__ = ["MAX_PAGE_SIZE", "PageQuery", "PageRequest", "Sort", "SortDirection"]
