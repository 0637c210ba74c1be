"""Unit tests for saved filters: records, stores, notifier and manager."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Any

import pytest

from resops.application.filters import FieldKind, FilterField, FilterSchema
from resops.application.saved_filters import (
    InMemoryNotifier,
    InMemorySavedFilterStore,
    LoggingNotifier,
    NewSavedFilter,
    Notification,
    NotificationLevel,
    Notifier,
    SavedFilter,
    SavedFilterManager,
    SavedFilterStore,
)
from resops.application.staging import FilterStagingGate
from resops.config import ResopsSettings
from resops.kernel.errors import NotFoundError, SerializationError, TransportError, ValidationError
from resops.kernel.time import FrozenClock

SCHEMA = FilterSchema(
    [
        FilterField("search", FieldKind.TEXT),
        FilterField("status", FieldKind.SINGLE),
        FilterField("managers", FieldKind.MULTI, param="manager", column="manager"),
    ]
)

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def _payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "id": 5,
        "name": "Active",
        "pageType": "researches",
        "filters": {"status": "active"},
        "createdBy": "ana",
        "createdAt": "2026-01-01T12:00:00+00:00",
        "updatedAt": "2026-01-02T08:30:00+00:00",
    }
    payload.update(overrides)
    return payload


class FailingStore:
    """SavedFilterStore whose every call fails like an unreachable backend."""

    def __init__(self) -> None:
        self.error = TransportError("/api/custom-filters", "HTTP 503", status_code=503)

    async def list(self, page_type: str) -> list[SavedFilter]:
        raise self.error

    async def create(self, new: NewSavedFilter) -> SavedFilter:
        raise self.error

    async def update(self, filter_id: str, changes: dict[str, Any]) -> SavedFilter:
        raise self.error

    async def delete(self, filter_id: str) -> None:
        raise self.error


def _manager(
    store: SavedFilterStore,
    notifier: InMemoryNotifier,
    *,
    user: str = "ana",
    settings: ResopsSettings | None = None,
) -> tuple[SavedFilterManager, FilterStagingGate]:
    gate = FilterStagingGate(SCHEMA, view_id="researches")
    manager = SavedFilterManager(
        store, gate, page_type="researches", user=user, notifier=notifier, settings=settings
    )
    return manager, gate


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class TestSavedFilterRecord:
    def test_from_payload(self) -> None:
        saved = SavedFilter.from_payload(_payload())
        assert saved.id == "5"
        assert saved.page_type == "researches"
        assert saved.filters == {"status": "active"}
        assert saved.created_at == NOW
        assert saved.updated_at.day == 2
        assert saved.description is None
        assert saved.shared is False

    def test_updated_at_defaults_to_created_at(self) -> None:
        payload = _payload()
        del payload["updatedAt"]
        assert SavedFilter.from_payload(payload).updated_at == NOW

    def test_missing_key(self) -> None:
        payload = _payload()
        del payload["pageType"]
        with pytest.raises(SerializationError, match="pageType"):
            SavedFilter.from_payload(payload)

    def test_bad_timestamp(self) -> None:
        with pytest.raises(SerializationError):
            SavedFilter.from_payload(_payload(createdAt="yesterday"))

    def test_non_object(self) -> None:
        with pytest.raises(SerializationError):
            SavedFilter.from_payload(["x"])

    def test_payload_round_trip(self) -> None:
        saved = SavedFilter.from_payload(_payload(description="Mine", shared=True))
        assert SavedFilter.from_payload(saved.to_payload()) == saved

    def test_new_filter_payload_is_camel_case(self) -> None:
        new = NewSavedFilter("Active", "researches", {"status": "active"}, "ana")
        assert new.to_payload() == {
            "name": "Active",
            "pageType": "researches",
            "filters": {"status": "active"},
            "createdBy": "ana",
            "shared": False,
        }
        assert NewSavedFilter("a", "p", {}, "u", description="d").to_payload()["description"] == "d"


# ---------------------------------------------------------------------------
# InMemorySavedFilterStore
# ---------------------------------------------------------------------------


class TestInMemorySavedFilterStore:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(InMemorySavedFilterStore(), SavedFilterStore)

    def test_create_assigns_ids_and_timestamps(self, fake_clock: FrozenClock) -> None:
        store = InMemorySavedFilterStore(clock=fake_clock)

        async def run() -> tuple[SavedFilter, SavedFilter]:
            a = await store.create(NewSavedFilter("A", "researches", {}, "ana"))
            b = await store.create(NewSavedFilter("B", "participants", {}, "ana"))
            return a, b

        a, b = asyncio.run(run())
        assert (a.id, b.id) == ("1", "2")
        assert a.created_at == a.updated_at == NOW

    def test_list_is_scoped_to_page_type(self, saved_filter_store: InMemorySavedFilterStore) -> None:
        async def run() -> list[SavedFilter]:
            await saved_filter_store.create(NewSavedFilter("A", "researches", {}, "ana"))
            await saved_filter_store.create(NewSavedFilter("B", "participants", {}, "ana"))
            return await saved_filter_store.list("researches")

        assert [f.name for f in asyncio.run(run())] == ["A"]

    def test_update_touches_updated_at(self, fake_clock: FrozenClock) -> None:
        store = InMemorySavedFilterStore(clock=fake_clock)

        async def run() -> SavedFilter:
            saved = await store.create(NewSavedFilter("A", "researches", {}, "ana"))
            fake_clock.advance(hours=1)
            return await store.update(saved.id, {"name": "B"})

        updated = asyncio.run(run())
        assert updated.name == "B"
        assert updated.updated_at > updated.created_at

    def test_update_rejects_unknown_fields(self, saved_filter_store: InMemorySavedFilterStore) -> None:
        with pytest.raises(ValidationError):
            asyncio.run(saved_filter_store.update("1", {"pageType": "x"}))

    def test_missing_ids(self, saved_filter_store: InMemorySavedFilterStore) -> None:
        with pytest.raises(NotFoundError):
            asyncio.run(saved_filter_store.update("404", {"name": "x"}))
        with pytest.raises(NotFoundError):
            asyncio.run(saved_filter_store.delete("404"))


# ---------------------------------------------------------------------------
# Notifiers
# ---------------------------------------------------------------------------


class TestNotifiers:
    def test_in_memory_notifier(self, notifier: InMemoryNotifier) -> None:
        assert isinstance(notifier, Notifier)
        notifier.notify(Notification("Filter saved"))
        notifier.notify(Notification("Boom", "details", NotificationLevel.ERROR))
        assert [n.title for n in notifier.sent] == ["Filter saved", "Boom"]
        assert [n.title for n in notifier.errors] == ["Boom"]
        notifier.reset()
        assert notifier.sent == []

    def test_logging_notifier(self) -> None:
        notifier = LoggingNotifier()
        assert isinstance(notifier, Notifier)
        notifier.notify(Notification("Filter saved"))
        notifier.notify(Notification("Boom", level=NotificationLevel.ERROR))


# ---------------------------------------------------------------------------
# SavedFilterManager
# ---------------------------------------------------------------------------


class TestSavedFilterManager:
    def test_can_save_only_with_active_filters(
        self, saved_filter_store: InMemorySavedFilterStore, notifier: InMemoryNotifier
    ) -> None:
        manager, gate = _manager(saved_filter_store, notifier)
        assert not manager.can_save
        gate.edit("status", "active")
        assert not manager.can_save
        asyncio.run(gate.apply())
        assert manager.can_save

    def test_save_captures_applied_filters(
        self, saved_filter_store: InMemorySavedFilterStore, notifier: InMemoryNotifier
    ) -> None:
        manager, gate = _manager(saved_filter_store, notifier)

        async def run() -> SavedFilter:
            gate.edit("managers", ["Bob", "Alice"])
            await gate.apply()
            gate.edit("status", "draft")
            return await manager.save("  Mine  ", description=" ")

        saved = asyncio.run(run())
        assert saved.name == "Mine"
        assert saved.description is None
        assert saved.filters == {"managers": ["Alice", "Bob"], "search": "", "status": None}
        assert saved.created_by == "ana"
        assert saved.shared is False
        assert [n.title for n in notifier.sent] == ["Filter saved"]

    def test_blank_name_rejected_without_store_call(
        self, saved_filter_store: InMemorySavedFilterStore, notifier: InMemoryNotifier
    ) -> None:
        manager, _ = _manager(saved_filter_store, notifier)
        with pytest.raises(ValidationError):
            asyncio.run(manager.save("   "))
        assert saved_filter_store.filters == {}
        assert [n.description for n in notifier.errors] == ["Filter name is required"]

    def test_shared_default_from_settings(
        self, saved_filter_store: InMemorySavedFilterStore, notifier: InMemoryNotifier
    ) -> None:
        settings = ResopsSettings(saved_filters_shared_by_default=True)
        manager, gate = _manager(saved_filter_store, notifier, settings=settings)
        asyncio.run(gate.apply_saved({"status": "active"}))
        assert asyncio.run(manager.save("Shared")).shared is True

    def test_apply_bypasses_pending_state(
        self, saved_filter_store: InMemorySavedFilterStore, notifier: InMemoryNotifier
    ) -> None:
        manager, gate = _manager(saved_filter_store, notifier)

        async def run() -> None:
            saved = await saved_filter_store.create(
                NewSavedFilter("Carol's", "researches", {"managers": ["Carol"]}, "bia")
            )
            gate.edit("status", "active")
            await manager.apply(saved)

        asyncio.run(run())
        assert gate.applied["managers"] == frozenset({"Carol"})
        assert not gate.has_pending
        assert notifier.sent[-1] == Notification("Filter applied", "Carol's")

    def test_apply_reads_legacy_string_values(
        self, saved_filter_store: InMemorySavedFilterStore, notifier: InMemoryNotifier
    ) -> None:
        manager, gate = _manager(saved_filter_store, notifier)

        async def run() -> None:
            saved = await saved_filter_store.create(
                NewSavedFilter("Old", "researches", {"managers": "ALL", "status": "active"}, "bia")
            )
            await manager.apply(saved)

        asyncio.run(run())
        assert gate.applied["managers"] == frozenset()
        assert gate.applied["status"] == "active"
        assert notifier.errors == []

    def test_apply_other_page_type_rejected(
        self, saved_filter_store: InMemorySavedFilterStore, notifier: InMemoryNotifier
    ) -> None:
        manager, _ = _manager(saved_filter_store, notifier)
        saved = SavedFilter.from_payload(_payload(pageType="participants"))
        with pytest.raises(ValidationError):
            asyncio.run(manager.apply(saved))

    def test_list_page_visibility(
        self, saved_filter_store: InMemorySavedFilterStore, notifier: InMemoryNotifier
    ) -> None:
        manager, _ = _manager(saved_filter_store, notifier)

        async def run() -> list[SavedFilter]:
            await saved_filter_store.create(NewSavedFilter("Own", "researches", {}, "ana"))
            await saved_filter_store.create(NewSavedFilter("Other", "researches", {}, "bia"))
            return await manager.list()

        assert [f.name for f in asyncio.run(run())] == ["Own", "Other"]

    def test_list_owner_visibility(
        self, saved_filter_store: InMemorySavedFilterStore, notifier: InMemoryNotifier
    ) -> None:
        settings = ResopsSettings(saved_filter_visibility="owner")
        manager, _ = _manager(saved_filter_store, notifier, settings=settings)

        async def run() -> list[SavedFilter]:
            await saved_filter_store.create(NewSavedFilter("Own", "researches", {}, "ana"))
            await saved_filter_store.create(NewSavedFilter("Private", "researches", {}, "bia"))
            await saved_filter_store.create(NewSavedFilter("Team", "researches", {}, "bia", shared=True))
            return await manager.list()

        assert [f.name for f in asyncio.run(run())] == ["Own", "Team"]

    def test_update_and_capture_current(
        self, saved_filter_store: InMemorySavedFilterStore, notifier: InMemoryNotifier
    ) -> None:
        manager, gate = _manager(saved_filter_store, notifier)

        async def run() -> SavedFilter:
            saved = await saved_filter_store.create(NewSavedFilter("Old", "researches", {}, "ana"))
            await gate.apply_saved({"status": "completed"})
            return await manager.update(saved.id, name=" New ", description="", capture_current=True)

        updated = asyncio.run(run())
        assert updated.name == "New"
        assert updated.description is None
        assert updated.filters["status"] == "completed"
        assert notifier.sent[-1].title == "Filter updated"

    def test_update_blank_name_rejected(
        self, saved_filter_store: InMemorySavedFilterStore, notifier: InMemoryNotifier
    ) -> None:
        manager, _ = _manager(saved_filter_store, notifier)
        with pytest.raises(ValidationError):
            asyncio.run(manager.update("1", name=" "))

    def test_delete(self, saved_filter_store: InMemorySavedFilterStore, notifier: InMemoryNotifier) -> None:
        manager, _ = _manager(saved_filter_store, notifier)

        async def run() -> None:
            saved = await saved_filter_store.create(NewSavedFilter("A", "researches", {}, "ana"))
            await manager.delete(saved.id)

        asyncio.run(run())
        assert saved_filter_store.filters == {}
        assert notifier.sent[-1].title == "Filter deleted"

    def test_delete_missing_notifies_and_raises(
        self, saved_filter_store: InMemorySavedFilterStore, notifier: InMemoryNotifier
    ) -> None:
        manager, _ = _manager(saved_filter_store, notifier)
        with pytest.raises(NotFoundError):
            asyncio.run(manager.delete("404"))
        assert [n.title for n in notifier.errors] == ["Could not delete filter"]

    @pytest.mark.parametrize(
        ("operation", "title"),
        [
            ("list", "Could not load filters"),
            ("save", "Could not save filter"),
            ("update", "Could not update filter"),
            ("delete", "Could not delete filter"),
        ],
    )
    def test_store_failures_notify_and_propagate(
        self, operation: str, title: str, notifier: InMemoryNotifier
    ) -> None:
        manager, gate = _manager(FailingStore(), notifier)

        async def run() -> None:
            await gate.apply_saved({"status": "active"})
            if operation == "list":
                await manager.list()
            elif operation == "save":
                await manager.save("Mine")
            elif operation == "update":
                await manager.update("1", name="x")
            else:
                await manager.delete("1")

        with pytest.raises(TransportError):
            asyncio.run(run())
        assert notifier.errors == [Notification(title, "HTTP 503", NotificationLevel.ERROR)]
