"""Testing fakes – in-memory doubles for the list engine's ports."""
from resops.application.pagination import InMemoryPageSource
from resops.application.preferences import InMemoryViewPreferencesStore
from resops.application.saved_filters import InMemoryNotifier, InMemorySavedFilterStore
from resops.kernel.time import FrozenClock
from resops.testing.fakes.clock import FakeClock
from resops.testing.fakes.page_fetcher import ScriptedPageFetcher

__all__ = [
    "FakeClock",
    "FrozenClock",
    "InMemoryNotifier",
    "InMemoryPageSource",
    "InMemorySavedFilterStore",
    "InMemoryViewPreferencesStore",
    "ScriptedPageFetcher",
]
