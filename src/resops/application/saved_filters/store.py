"""Application saved filters – SavedFilterStore port and in-memory store."""
from __future__ import annotations

import dataclasses
import itertools
from typing import Any, Protocol, runtime_checkable

from resops.application.saved_filters.model import NewSavedFilter, SavedFilter
from resops.kernel.errors import NotFoundError, ValidationError
from resops.kernel.time import Clock, SystemClock

UPDATABLE_FIELDS = frozenset({"name", "description", "filters", "shared"})


@runtime_checkable
class SavedFilterStore(Protocol):
    """Port: persistence of saved filters (``/api/custom-filters``)."""

    async def list(self, page_type: str) -> list[SavedFilter]: ...
    async def create(self, new: NewSavedFilter) -> SavedFilter: ...
    async def update(self, filter_id: str, changes: dict[str, Any]) -> SavedFilter: ...
    async def delete(self, filter_id: str) -> None: ...


def check_changes(changes: dict[str, Any]) -> None:
    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValidationError(f"Saved filter fields cannot be updated: {sorted(unknown)}")


class InMemorySavedFilterStore:
    """SavedFilterStore kept in a dict – for unit tests and local use."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._ids = itertools.count(1)
        self.filters: dict[str, SavedFilter] = {}

    async def list(self, page_type: str) -> list[SavedFilter]:
        return [f for f in self.filters.values() if f.page_type == page_type]

    async def create(self, new: NewSavedFilter) -> SavedFilter:
        now = self._clock.now()
        saved = SavedFilter(
            id=str(next(self._ids)),
            name=new.name,
            page_type=new.page_type,
            filters=dict(new.filters),
            created_by=new.created_by,
            created_at=now,
            updated_at=now,
            description=new.description,
            shared=new.shared,
        )
        self.filters[saved.id] = saved
        return saved

    async def update(self, filter_id: str, changes: dict[str, Any]) -> SavedFilter:
        check_changes(changes)
        current = self.filters.get(filter_id)
        if current is None:
            raise NotFoundError("SavedFilter", filter_id)
        updated = dataclasses.replace(current, **changes, updated_at=self._clock.now())
        self.filters[filter_id] = updated
        return updated

    async def delete(self, filter_id: str) -> None:
        if self.filters.pop(filter_id, None) is None:
            raise NotFoundError("SavedFilter", filter_id)


__all__ = ["InMemorySavedFilterStore", "SavedFilterStore", "UPDATABLE_FIELDS", "check_changes"]
