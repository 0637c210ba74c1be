"""
resops – paginated query, filter and incremental-load engine for the
research-operations tracker.

Import path convention::

    from resops.application.filters import FilterSchema, FilterSet
    from resops.application.loading import IncrementalLoader
    from resops.adapters.http import HttpPageFetcher
    from resops.kernel.errors import TransportError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
