"""Application pagination – page protocol primitives and the in-memory source."""
from resops.application.pagination.page import PageFetcher, PageResponse
from resops.application.pagination.page_request import (
    MAX_PAGE_SIZE,
    PageQuery,
    PageRequest,
    Sort,
    SortDirection,
)
from resops.application.pagination.source import InMemoryPageSource

__all__ = [
    "InMemoryPageSource",
    "MAX_PAGE_SIZE",
    "PageFetcher",
    "PageQuery",
    "PageRequest",
    "PageResponse",
    "Sort",
    "SortDirection",
]
