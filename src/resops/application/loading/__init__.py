"""Application loading – debouncing, scroll trigger and incremental page loading."""
from resops.application.loading.controller import IncrementalLoader, LoadState, item_key
from resops.application.loading.debounce import Debouncer
from resops.application.loading.scroll import DEFAULT_THRESHOLD_PX, ScrollPosition, is_near_bottom

__all__ = [
    "DEFAULT_THRESHOLD_PX",
    "Debouncer",
    "IncrementalLoader",
    "LoadState",
    "ScrollPosition",
    "is_near_bottom",
    "item_key",
]
