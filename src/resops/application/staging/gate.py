"""Application staging – FilterStagingGate.

Keeps two filter sets per view: ``draft`` bound to the form controls and
``applied`` bound to the query.  Only the search field crosses over on its
own, after the debounce delay; every other field waits for :meth:`apply`.
Applied filters are persisted per view, drafts never are.
"""
from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable

from resops.application.filters import FieldKind, FilterSchema, FilterSet
from resops.application.loading import Debouncer
from resops.application.preferences import ViewPreferences, ViewPreferencesStore
from resops.observability.logging import get_logger

_log = get_logger(__name__)

AppliedCallback = Callable[[FilterSet], "Awaitable[None] | None"]


class FilterStagingGate:
    def __init__(
        self,
        schema: FilterSchema,
        *,
        view_id: str,
        preferences: ViewPreferencesStore | None = None,
        debounce_ms: int = 500,
        on_applied: AppliedCallback | None = None,
    ) -> None:
        self._schema = schema
        self._view_id = view_id
        self._preferences = preferences
        self._on_applied = on_applied
        self._draft = schema.empty()
        self._applied = schema.empty()
        self._debouncer: Debouncer[str] = Debouncer(debounce_ms, self._promote_search)

    @property
    def schema(self) -> FilterSchema:
        return self._schema

    @property
    def view_id(self) -> str:
        return self._view_id

    @property
    def draft(self) -> FilterSet:
        return self._draft

    @property
    def applied(self) -> FilterSet:
        return self._applied

    @property
    def has_pending(self) -> bool:
        """True while the form shows changes that are not applied yet."""
        return self._draft != self._applied

    def mount(self) -> FilterSet:
        """Restore the last applied filters of this view."""
        if self._preferences is not None:
            stored = self._preferences.load(self._view_id).filters
            if stored is not None:
                self._applied = FilterSet.from_json(self._schema, stored)
                self._draft = self._applied
                _log.debug("staging.restored", view_id=self._view_id)
        return self._applied

    def edit(self, field: str, value: Any) -> FilterSet:
        """Change one draft field; only the search field auto-applies."""
        self._draft = self._draft.replace(**{field: value})
        if self._schema[field].kind is FieldKind.TEXT:
            self._debouncer.push(self._draft[field])
        return self._draft

    def set_search(self, text: str) -> FilterSet:
        if self._schema.search_field is None:
            return self._draft
        return self.edit(self._schema.search_field.name, text)

    def discard(self) -> FilterSet:
        """Drop pending edits, going back to the applied filters."""
        self._debouncer.cancel()
        self._draft = self._applied
        return self._draft

    async def apply(self) -> FilterSet:
        self._debouncer.cancel()
        await self._commit(self._draft)
        return self._applied

    async def clear(self) -> FilterSet:
        """Reset draft and applied filters to empty in one step."""
        self._debouncer.cancel()
        empty = self._schema.empty()
        self._draft = empty
        await self._commit(empty)
        return self._applied

    async def apply_saved(self, filters: FilterSet | dict[str, Any]) -> FilterSet:
        """Take *filters* into effect immediately, bypassing the pending state."""
        self._debouncer.cancel()
        restored = (
            FilterSet(self._schema, filters) if isinstance(filters, FilterSet) else FilterSet.from_json(self._schema, filters)
        )
        self._draft = restored
        await self._commit(restored)
        return self._applied

    def close(self) -> None:
        self._debouncer.close()

    async def settle(self) -> None:
        """Wait for an auto-applied search that already fired to complete."""
        await self._debouncer.drain()

    async def _promote_search(self, text: str) -> None:
        await self._commit(self._applied.with_search(text))

    async def _commit(self, filters: FilterSet) -> None:
        if filters == self._applied:
            return
        self._applied = filters
        if self._preferences is not None:
            self._preferences.save(self._view_id, ViewPreferences(filters=filters.to_json()))
        _log.debug("staging.applied", view_id=self._view_id, active=filters.is_active())
        if self._on_applied is not None:
            result = self._on_applied(filters)
            if inspect.isawaitable(result):
                await result


__all__ = ["FilterStagingGate"]
