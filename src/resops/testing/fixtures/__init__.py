"""Testing fixtures – pytest fixtures for the list engine's fakes.

Import in your ``conftest.py``::

    pytest_plugins = ["resops.testing.fixtures"]
"""
from resops.testing.fixtures.fakes import (
    fake_clock,
    notifier,
    preferences,
    saved_filter_store,
)

__all__ = ["fake_clock", "notifier", "preferences", "saved_filter_store"]
