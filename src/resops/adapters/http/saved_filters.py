"""HTTP adapter – HttpSavedFilterStore for ``/api/custom-filters``."""
from __future__ import annotations

from typing import Any

import httpx

from resops.adapters.http.client import HttpxHttpClient
from resops.application.saved_filters import NewSavedFilter, SavedFilter
from resops.application.saved_filters.store import check_changes
from resops.kernel.errors import SerializationError


def _json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise SerializationError(f"Invalid JSON from {response.request.url}") from exc


class HttpSavedFilterStore:
    """SavedFilterStore talking to the custom-filters endpoint."""

    def __init__(self, client: HttpxHttpClient, path: str = "/api/custom-filters") -> None:
        self._client = client
        self._path = path.rstrip("/")

    async def list(self, page_type: str) -> list[SavedFilter]:
        response = await self._client.get(self._path, params={"pageType": page_type})
        payload = _json(response)
        if isinstance(payload, dict) and isinstance(payload.get("data"), list):
            payload = payload["data"]
        if not isinstance(payload, list):
            raise SerializationError("Saved filter list must be a JSON array")
        return [SavedFilter.from_payload(item) for item in payload]

    async def create(self, new: NewSavedFilter) -> SavedFilter:
        response = await self._client.post(self._path, json=new.to_payload())
        return SavedFilter.from_payload(_json(response))

    async def update(self, filter_id: str, changes: dict[str, Any]) -> SavedFilter:
        check_changes(changes)
        response = await self._client.patch(f"{self._path}/{filter_id}", json=changes)
        return SavedFilter.from_payload(_json(response))

    async def delete(self, filter_id: str) -> None:
        await self._client.delete(f"{self._path}/{filter_id}")


__all__ = ["HttpSavedFilterStore"]
