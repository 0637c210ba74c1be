"""Application pagination – PageResponse and the PageFetcher port."""
from __future__ import annotations

import dataclasses
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from resops.application.pagination.page_request import PageRequest
from resops.observability.logging import get_logger

T = TypeVar("T")

_log = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class PageResponse(Generic[T]):
    """One page of results.

    ``has_more`` is authoritative: once it is ``False`` no further page of
    the same query is requested.  ``total`` is only filled by sources that
    ran a separate count.
    """

    data: list[T]
    has_more: bool = False
    total: int | None = None

    @classmethod
    def empty(cls) -> "PageResponse[T]":
        return cls(data=[], has_more=False)

    @classmethod
    def from_payload(cls, payload: Any) -> "PageResponse[Any]":
        """Decode a ``{data, hasMore, total?}`` body.

        A bare JSON array is a complete, single-page answer.  Anything else
        that does not carry a ``data`` list counts as zero results with
        ``has_more=False`` so paging stops.
        """
        if isinstance(payload, list):
            return cls(data=list(payload), has_more=False)
        if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
            _log.warning("pagination.malformed_payload", payload_type=type(payload).__name__)
            return cls.empty()
        has_more = payload.get("hasMore")
        total = payload.get("total")
        return cls(
            data=list(payload["data"]),
            has_more=has_more if isinstance(has_more, bool) else False,
            total=total if isinstance(total, int) and not isinstance(total, bool) else None,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"data": list(self.data), "hasMore": self.has_more}
        if self.total is not None:
            payload["total"] = self.total
        return payload


@runtime_checkable
class PageFetcher(Protocol[T]):
    """Port: fetch one page of a list query."""

    async def fetch(self, request: PageRequest) -> PageResponse[T]: ...


__all__ = ["PageFetcher", "PageResponse"]
