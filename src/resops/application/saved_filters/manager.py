"""Application saved filters – SavedFilterManager.

Saves the applied filters of a view under a name, lists the saved filters of
the view's page type, applies one (immediately, without going through the
pending state of the gate) and deletes or edits them.  Store failures are
shown as an error notification and re-raised; nothing is rolled back.
"""
from __future__ import annotations

from typing import Any, Awaitable, TypeVar

from resops.application.saved_filters.model import NewSavedFilter, SavedFilter
from resops.application.saved_filters.notifier import (
    LoggingNotifier,
    Notification,
    NotificationLevel,
    Notifier,
)
from resops.application.saved_filters.store import SavedFilterStore
from resops.application.staging import FilterStagingGate
from resops.config.settings import VISIBILITY_OWNER, ResopsSettings
from resops.kernel.errors import ResopsError, ValidationError
from resops.observability.logging import get_logger

T = TypeVar("T")

_log = get_logger(__name__)


class SavedFilterManager:
    def __init__(
        self,
        store: SavedFilterStore,
        gate: FilterStagingGate,
        *,
        page_type: str,
        user: str,
        notifier: Notifier | None = None,
        settings: ResopsSettings | None = None,
    ) -> None:
        settings = settings or ResopsSettings()
        self._store = store
        self._gate = gate
        self._page_type = page_type
        self._user = user
        self._notifier = notifier or LoggingNotifier()
        self._shared_default = settings.saved_filters_shared_by_default
        self._visibility = settings.saved_filter_visibility

    @property
    def page_type(self) -> str:
        return self._page_type

    @property
    def can_save(self) -> bool:
        """Saving is offered only when the applied filters narrow the list."""
        return self._gate.applied.is_active()

    async def list(self) -> list[SavedFilter]:
        filters = await self._failing_with("Could not load filters", self._store.list(self._page_type))
        if self._visibility == VISIBILITY_OWNER:
            filters = [f for f in filters if f.created_by == self._user or f.shared]
        return filters

    async def save(self, name: str, description: str | None = None) -> SavedFilter:
        name = name.strip()
        if not name:
            self._error("Validation error", "Filter name is required")
            raise ValidationError("Filter name is required", field="name")
        new = NewSavedFilter(
            name=name,
            page_type=self._page_type,
            filters=self._gate.applied.to_json(),
            created_by=self._user,
            description=(description or "").strip() or None,
            shared=self._shared_default,
        )
        saved = await self._failing_with("Could not save filter", self._store.create(new))
        _log.info("saved_filters.created", filter_id=saved.id, page_type=self._page_type)
        self._notifier.notify(Notification("Filter saved"))
        return saved

    async def apply(self, saved: SavedFilter) -> None:
        if saved.page_type != self._page_type:
            raise ValidationError(
                f"Filter '{saved.name}' belongs to '{saved.page_type}', not '{self._page_type}'",
                field="page_type",
            )
        await self._failing_with("Could not apply filter", self._gate.apply_saved(saved.filters))
        self._notifier.notify(Notification("Filter applied", saved.name))

    async def update(
        self,
        filter_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        capture_current: bool = False,
    ) -> SavedFilter:
        """Edit a saved filter; *capture_current* replaces its filters with the applied ones."""
        changes: dict[str, Any] = {}
        if name is not None:
            if not name.strip():
                self._error("Validation error", "Filter name is required")
                raise ValidationError("Filter name is required", field="name")
            changes["name"] = name.strip()
        if description is not None:
            changes["description"] = description.strip() or None
        if capture_current:
            changes["filters"] = self._gate.applied.to_json()
        updated = await self._failing_with("Could not update filter", self._store.update(filter_id, changes))
        _log.info("saved_filters.updated", filter_id=filter_id, fields=sorted(changes))
        self._notifier.notify(Notification("Filter updated"))
        return updated

    async def delete(self, filter_id: str) -> None:
        await self._failing_with("Could not delete filter", self._store.delete(filter_id))
        _log.info("saved_filters.deleted", filter_id=filter_id)
        self._notifier.notify(Notification("Filter deleted"))

    async def _failing_with(self, title: str, operation: Awaitable[T]) -> T:
        try:
            return await operation
        except ResopsError as exc:
            _log.warning("saved_filters.operation_failed", title=title, error=exc.to_dict())
            self._error(title, exc.message)
            raise

    def _error(self, title: str, description: str) -> None:
        self._notifier.notify(Notification(title, description, NotificationLevel.ERROR))


__all__ = ["SavedFilterManager"]
