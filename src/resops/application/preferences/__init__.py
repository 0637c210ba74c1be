"""Application preferences – per-view persisted state and column layout."""
from resops.application.preferences.columns import (
    CellRenderer,
    ColumnDescriptor,
    ColumnKind,
    ColumnLayout,
)
from resops.application.preferences.store import (
    InMemoryViewPreferencesStore,
    JsonFileViewPreferencesStore,
    ViewPreferences,
    ViewPreferencesStore,
    columns_key,
    filters_key,
)

__all__ = [
    "CellRenderer",
    "ColumnDescriptor",
    "ColumnKind",
    "ColumnLayout",
    "InMemoryViewPreferencesStore",
    "JsonFileViewPreferencesStore",
    "ViewPreferences",
    "ViewPreferencesStore",
    "columns_key",
    "filters_key",
]
