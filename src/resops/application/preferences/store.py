"""Application preferences – ViewPreferences and its stores.

Each view keeps two entries: the last applied filters (``<view>-filters``)
and the column layout (``<view>-columns``).  They are read once when a view
mounts and written on every committed change.  Concurrent writers race with
last-write-wins semantics; there is no locking.
"""
from __future__ import annotations

import copy
import dataclasses
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from resops.config.settings import ResopsSettings
from resops.kernel.errors import PreferencesStorageError
from resops.observability.logging import get_logger

_log = get_logger(__name__)


@dataclasses.dataclass
class ViewPreferences:
    """Persisted state of one view.

    ``None`` means "nothing stored"; on save it means "leave the stored
    entry untouched".
    """

    filters: dict[str, Any] | None = None
    columns: list[dict[str, Any]] | None = None


@runtime_checkable
class ViewPreferencesStore(Protocol):
    """Port: per-view persisted preferences."""

    def load(self, view_id: str) -> ViewPreferences: ...
    def save(self, view_id: str, prefs: ViewPreferences) -> None: ...


def filters_key(view_id: str) -> str:
    return f"{view_id}-filters"


def columns_key(view_id: str) -> str:
    return f"{view_id}-columns"


def _decode(view_id: str, doc: dict[str, Any]) -> ViewPreferences:
    filters = doc.get(filters_key(view_id))
    columns = doc.get(columns_key(view_id))
    if filters is not None and not isinstance(filters, dict):
        _log.warning("preferences.invalid_filters", view_id=view_id)
        filters = None
    if columns is not None and not isinstance(columns, list):
        _log.warning("preferences.invalid_columns", view_id=view_id)
        columns = None
    return ViewPreferences(filters=filters, columns=columns)


def _encode(view_id: str, prefs: ViewPreferences, doc: dict[str, Any]) -> None:
    if prefs.filters is not None:
        doc[filters_key(view_id)] = prefs.filters
    if prefs.columns is not None:
        doc[columns_key(view_id)] = prefs.columns


class InMemoryViewPreferencesStore:
    """ViewPreferencesStore backed by a dict – for unit tests."""

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}
        self.writes = 0

    def load(self, view_id: str) -> ViewPreferences:
        return _decode(view_id, copy.deepcopy(self.data))

    def save(self, view_id: str, prefs: ViewPreferences) -> None:
        self.writes += 1
        _encode(view_id, copy.deepcopy(prefs), self.data)


class JsonFileViewPreferencesStore:
    """ViewPreferencesStore persisted as a single JSON document on disk.

    Writes go to a temporary file that atomically replaces the document.
    An unreadable document is treated as empty.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @classmethod
    def from_settings(cls, settings: ResopsSettings) -> "JsonFileViewPreferencesStore":
        return cls(settings.preferences_path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, Any]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            _log.warning("preferences.read_failed", path=str(self._path), error=str(exc))
            return {}
        try:
            doc = json.loads(raw)
        except json.JSONDecodeError as exc:
            _log.warning("preferences.corrupt_document", path=str(self._path), error=str(exc))
            return {}
        return doc if isinstance(doc, dict) else {}

    def load(self, view_id: str) -> ViewPreferences:
        return _decode(view_id, self._read())

    def save(self, view_id: str, prefs: ViewPreferences) -> None:
        doc = self._read()
        _encode(view_id, prefs, doc)
        tmp: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(doc, fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
            tmp = None
        except (OSError, TypeError, ValueError) as exc:
            raise PreferencesStorageError(str(self._path), cause=exc) from exc
        finally:
            if tmp is not None:
                Path(tmp).unlink(missing_ok=True)
        _log.debug("preferences.saved", path=str(self._path), view_id=view_id)


__all__ = [
    "InMemoryViewPreferencesStore",
    "JsonFileViewPreferencesStore",
    "ViewPreferences",
    "ViewPreferencesStore",
    "columns_key",
    "filters_key",
]
