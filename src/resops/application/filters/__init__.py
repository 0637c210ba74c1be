"""Application filters – typed filter sets and their wire encoding."""
from resops.application.filters.fields import ALL, FieldKind, FilterField, FilterSchema
from resops.application.filters.filter_set import FilterSet

__all__ = ["ALL", "FieldKind", "FilterField", "FilterSchema", "FilterSet"]
