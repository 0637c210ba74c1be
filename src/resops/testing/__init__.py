"""Testing support – fakes, fixtures and Hypothesis strategies.

Import in your ``conftest.py``::

    pytest_plugins = ["resops.testing.fixtures"]
"""

from resops.testing.fakes import (
    FakeClock,
    InMemoryNotifier,
    InMemoryPageSource,
    InMemorySavedFilterStore,
    InMemoryViewPreferencesStore,
    ScriptedPageFetcher,
)
from resops.testing.generators import filter_set_strategy, raw_filters_strategy

__all__ = [
    "FakeClock",
    "InMemoryNotifier",
    "InMemoryPageSource",
    "InMemorySavedFilterStore",
    "InMemoryViewPreferencesStore",
    "ScriptedPageFetcher",
    "filter_set_strategy",
    "raw_filters_strategy",
]
