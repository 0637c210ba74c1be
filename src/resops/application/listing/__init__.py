"""Application listing – list views composed from gate, loader and sort."""
from resops.application.listing.view import ListView

__all__ = ["ListView"]
