"""HTTP adapter – HttpPageFetcher for ``GET /api/<entity>`` list endpoints."""
from __future__ import annotations

from typing import Any

from resops.adapters.http.client import HttpxHttpClient
from resops.application.pagination import PageRequest, PageResponse
from resops.observability.logging import get_logger

_log = get_logger(__name__)


class HttpPageFetcher:
    """PageFetcher that sends a :class:`PageRequest` as query parameters.

    The request's endpoint is used as the URL path.  Multi-valued filters go
    out as repeated keys (``manager=Alice&manager=Bob``).
    """

    def __init__(self, client: HttpxHttpClient) -> None:
        self._client = client

    async def fetch(self, request: PageRequest) -> PageResponse[Any]:
        url = request.query.endpoint
        response = await self._client.get(url, params=request.to_query_params())
        try:
            payload = response.json()
        except ValueError:
            _log.warning("http.pages.invalid_json", url=url, page=request.page)
            return PageResponse.empty()
        return PageResponse.from_payload(payload)


__all__ = ["HttpPageFetcher"]
