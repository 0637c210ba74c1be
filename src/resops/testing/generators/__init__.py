"""Testing generators – Hypothesis strategies for filter values."""
from resops.testing.generators.strategies import filter_set_strategy, raw_filters_strategy

__all__ = ["filter_set_strategy", "raw_filters_strategy"]
