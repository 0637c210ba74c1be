"""Application saved filters – named, persisted filter snapshots per page type."""
from resops.application.saved_filters.manager import SavedFilterManager
from resops.application.saved_filters.model import NewSavedFilter, SavedFilter
from resops.application.saved_filters.notifier import (
    InMemoryNotifier,
    LoggingNotifier,
    Notification,
    NotificationLevel,
    Notifier,
)
from resops.application.saved_filters.store import (
    InMemorySavedFilterStore,
    SavedFilterStore,
    UPDATABLE_FIELDS,
)

__all__ = [
    "InMemoryNotifier",
    "InMemorySavedFilterStore",
    "LoggingNotifier",
    "NewSavedFilter",
    "Notification",
    "NotificationLevel",
    "Notifier",
    "SavedFilter",
    "SavedFilterManager",
    "SavedFilterStore",
    "UPDATABLE_FIELDS",
]
