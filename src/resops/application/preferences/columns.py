"""Application preferences – column descriptors, layout and cell rendering.

Columns are plain data: a :class:`ColumnKind` tag plus the row field to read.
Rendering goes through one :class:`CellRenderer`; ``custom`` columns name a
renderer registered on it, so a layout never has to carry callables and can
be persisted as-is.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Sequence

from resops.application.preferences.store import ViewPreferences, ViewPreferencesStore
from resops.kernel.errors import NotFoundError, ValidationError
from resops.observability.logging import get_logger

_log = get_logger(__name__)


class ColumnKind(str, Enum):
    STATUS = "status"
    TEXT = "text"
    DATE = "date"
    CUSTOM = "custom"


@dataclasses.dataclass(frozen=True)
class ColumnDescriptor:
    id: str
    name: str
    kind: ColumnKind = ColumnKind.TEXT
    field: str | None = None
    visible: bool = True
    sortable: bool = False
    renderer: str | None = None

    def __post_init__(self) -> None:
        if self.kind is ColumnKind.CUSTOM and not self.renderer:
            raise ValidationError(f"Custom column '{self.id}' needs a renderer name", field="renderer")

    @property
    def field_name(self) -> str:
        return self.field or self.id


class ColumnLayout:
    """Ordered, per-view column configuration.

    :meth:`restore` applies a saved ``[{id, visible}]`` list to the declared
    columns: saved columns come first in saved order, ids that no longer exist
    are dropped and newly declared columns are appended.
    """

    def __init__(
        self,
        columns: Sequence[ColumnDescriptor],
        *,
        store: ViewPreferencesStore | None = None,
        view_id: str | None = None,
    ) -> None:
        self._columns = list(columns)
        self._store = store
        self._view_id = view_id

    @classmethod
    def restore(
        cls,
        declared: Sequence[ColumnDescriptor],
        saved: Sequence[Mapping[str, Any]] | None,
        **kwargs: Any,
    ) -> "ColumnLayout":
        if not saved:
            return cls(declared, **kwargs)
        by_id = {c.id: c for c in declared}
        result: list[ColumnDescriptor] = []
        placed: set[str] = set()
        for entry in saved:
            if not isinstance(entry, Mapping):
                continue
            column = by_id.get(str(entry.get("id")))
            if column is None or column.id in placed:
                continue
            placed.add(column.id)
            result.append(dataclasses.replace(column, visible=bool(entry.get("visible", column.visible))))
        result.extend(c for c in declared if c.id not in placed)
        return cls(result, **kwargs)

    @classmethod
    def load(cls, store: ViewPreferencesStore, view_id: str, declared: Sequence[ColumnDescriptor]) -> "ColumnLayout":
        """Restore the layout of *view_id*; later changes are written back."""
        return cls.restore(declared, store.load(view_id).columns, store=store, view_id=view_id)

    @property
    def columns(self) -> list[ColumnDescriptor]:
        return list(self._columns)

    def visible(self) -> list[ColumnDescriptor]:
        return [c for c in self._columns if c.visible]

    def _index(self, column_id: str) -> int:
        for i, column in enumerate(self._columns):
            if column.id == column_id:
                return i
        raise NotFoundError("Column", column_id)

    def toggle(self, column_id: str, visible: bool) -> None:
        i = self._index(column_id)
        self._columns[i] = dataclasses.replace(self._columns[i], visible=visible)
        self._persist()

    def move(self, column_id: str, new_index: int) -> None:
        """Move a column, as a drag-and-drop reorder does."""
        column = self._columns.pop(self._index(column_id))
        new_index = max(0, min(new_index, len(self._columns)))
        self._columns.insert(new_index, column)
        self._persist()

    def to_config(self) -> list[dict[str, Any]]:
        return [{"id": c.id, "visible": c.visible} for c in self._columns]

    def _persist(self) -> None:
        if self._store is None or self._view_id is None:
            return
        self._store.save(self._view_id, ViewPreferences(columns=self.to_config()))


def _as_dict(item: Any) -> Mapping[str, Any]:
    return item if isinstance(item, Mapping) else vars(item)


class CellRenderer:
    """Turns a row value into display text according to the column kind."""

    def __init__(
        self,
        *,
        status_labels: Mapping[str, str] | None = None,
        date_format: str = "%d/%m/%Y",
    ) -> None:
        self._status_labels = dict(status_labels or {})
        self._date_format = date_format
        self._renderers: dict[str, Callable[[Any], str]] = {}

    def register(self, name: str, fn: Callable[[Any], str]) -> None:
        self._renderers[name] = fn

    def render(self, column: ColumnDescriptor, item: Any) -> str:
        if column.kind is ColumnKind.CUSTOM:
            fn = self._renderers.get(column.renderer or "")
            if fn is None:
                raise NotFoundError("Renderer", column.renderer)
            return fn(item)
        value = _as_dict(item).get(column.field_name)
        if value is None:
            return ""
        if column.kind is ColumnKind.STATUS:
            return self._status_labels.get(str(value), str(value))
        if column.kind is ColumnKind.DATE:
            return self._format_date(value)
        return str(value)

    def _format_date(self, value: Any) -> str:
        if isinstance(value, (datetime, date)):
            return value.strftime(self._date_format)
        try:
            return datetime.fromisoformat(str(value)).strftime(self._date_format)
        except ValueError:
            _log.debug("columns.unparseable_date", value=str(value))
            return str(value)


__all__ = ["CellRenderer", "ColumnDescriptor", "ColumnKind", "ColumnLayout"]
