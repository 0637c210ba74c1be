"""Application filters – FieldKind, FilterField, FilterSchema."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Iterable, Iterator

from resops.kernel.errors import ValidationError
from resops.observability.logging import get_logger

_log = get_logger(__name__)

ALL = "ALL"
"""Control-level token a single-choice dropdown shows for "no filter"."""

_UNSET_TOKENS = frozenset({"", "all"})


class FieldKind(str, Enum):
    TEXT = "text"
    SINGLE = "single"
    MULTI = "multi"


@dataclasses.dataclass(frozen=True)
class FilterField:
    """One filterable field of a list view.

    ``param`` is the outbound query-string key and ``column`` the attribute of
    the stored row the predicate is evaluated against; both default to
    ``name``.
    """

    name: str
    kind: FieldKind
    param: str | None = None
    column: str | None = None

    @property
    def param_name(self) -> str:
        return self.param or self.name

    @property
    def column_name(self) -> str:
        return self.column or self.name

    def empty(self) -> Any:
        if self.kind is FieldKind.MULTI:
            return frozenset()
        if self.kind is FieldKind.SINGLE:
            return None
        return ""

    def coerce(self, raw: Any) -> Any:
        """Normalise a raw value for this field."""
        if self.kind is FieldKind.TEXT:
            return "" if raw is None else str(raw).strip()
        if self.kind is FieldKind.SINGLE:
            if raw is None or isinstance(raw, bool):
                return None
            token = str(raw)
            return None if token.strip().lower() in _UNSET_TOKENS else token
        if raw is None:
            return frozenset()
        if isinstance(raw, (str, bytes)):
            raise ValidationError(
                f"Multi-choice field '{self.name}' expects a collection, got a string",
                field=self.name,
            )
        return frozenset(str(member) for member in raw if str(member).strip())

    def restore(self, stored: Any) -> Any:
        """Normalise a stored value, tolerating shapes written by older layouts.

        A plain string in a multi-choice field becomes a one-member set (or the
        empty set for an unset token) and a one-member list in a single-choice
        field becomes that member.  Anything else that cannot be read falls
        back to the field's empty value with a warning.
        """
        if self.kind is FieldKind.MULTI:
            if isinstance(stored, str):
                token = stored.strip()
                return frozenset() if token.lower() in _UNSET_TOKENS else frozenset({token})
            if isinstance(stored, (int, float)) and not isinstance(stored, bool):
                return frozenset({str(stored)})
            if stored is not None and not isinstance(stored, (list, tuple, set, frozenset)):
                return self._unreadable(stored)
        elif self.kind is FieldKind.SINGLE:
            if isinstance(stored, (list, tuple, set, frozenset)):
                members = list(stored)
                return self.coerce(members[0]) if len(members) == 1 else self._unreadable(stored)
            if isinstance(stored, dict):
                return self._unreadable(stored)
        elif isinstance(stored, (list, tuple, set, frozenset, dict)):
            return self._unreadable(stored)
        return self.coerce(stored)

    def _unreadable(self, stored: Any) -> Any:
        _log.warning("filters.unreadable_value", field=self.name, value_type=type(stored).__name__)
        return self.empty()

    def to_control(self, value: Any) -> Any:
        """Value as a form control shows it (``ALL`` for an unset dropdown)."""
        if self.kind is FieldKind.SINGLE:
            return ALL if value is None else value
        if self.kind is FieldKind.MULTI:
            return sorted(value)
        return value

    def from_control(self, raw: Any) -> Any:
        return self.coerce(raw)


class FilterSchema:
    """Ordered declaration of the filter fields of one view."""

    def __init__(self, fields: Iterable[FilterField]) -> None:
        self._fields: dict[str, FilterField] = {}
        for f in fields:
            if f.name in self._fields:
                raise ValidationError(f"Duplicate filter field '{f.name}'", field=f.name)
            self._fields[f.name] = f
        text_fields = [f for f in self._fields.values() if f.kind is FieldKind.TEXT]
        if len(text_fields) > 1:
            raise ValidationError("A filter schema may declare at most one text field")
        self.search_field: FilterField | None = text_fields[0] if text_fields else None

    def __iter__(self) -> Iterator[FilterField]:
        return iter(self._fields.values())

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, name: str) -> FilterField:
        try:
            return self._fields[name]
        except KeyError:
            raise ValidationError(f"Unknown filter field '{name}'", field=name) from None

    def empty(self) -> "FilterSet":
        from resops.application.filters.filter_set import FilterSet

        return FilterSet(self, {})

    def normalize(self, raw: dict[str, Any] | None) -> "FilterSet":
        from resops.application.filters.filter_set import FilterSet

        return FilterSet(self, raw or {})


__all__ = ["ALL", "FieldKind", "FilterField", "FilterSchema"]
