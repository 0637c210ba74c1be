"""Application filters – FilterSet value object.

A ``FilterSet`` always holds every field of its schema: multi-choice fields
are ``frozenset`` (possibly empty), unset single-choice fields are ``None``
and an empty search is ``""``.  Two sets are equal when their canonical JSON
forms match, so member order of multi-choice fields never matters.
"""
from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Iterator

from resops.application.filters.fields import FieldKind, FilterSchema
from resops.observability.logging import get_logger

_log = get_logger(__name__)


class FilterSet(Mapping[str, Any]):
    __slots__ = ("_schema", "_values", "_canonical")

    def __init__(self, schema: FilterSchema, raw: Mapping[str, Any]) -> None:
        unknown = [key for key in raw if key not in schema]
        if unknown:
            _log.debug("filters.unknown_fields_dropped", fields=sorted(unknown))
        self._schema = schema
        self._values: dict[str, Any] = {
            f.name: f.coerce(raw[f.name]) if f.name in raw else f.empty() for f in schema
        }
        self._canonical = json.dumps(
            {
                name: sorted(value) if isinstance(value, frozenset) else value
                for name, value in self._values.items()
            },
            sort_keys=True,
            ensure_ascii=False,
        )

    @property
    def schema(self) -> FilterSchema:
        return self._schema

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterSet):
            return NotImplemented
        return self._canonical == other._canonical

    def __hash__(self) -> int:
        return hash(self._canonical)

    def __repr__(self) -> str:
        return f"FilterSet({self._canonical})"

    def canonical(self) -> str:
        return self._canonical

    @property
    def search(self) -> str:
        field = self._schema.search_field
        return self._values[field.name] if field is not None else ""

    def replace(self, **changes: Any) -> "FilterSet":
        """Return a copy with *changes* applied (values are normalised)."""
        for name in changes:
            self._schema[name]  # raises ValidationError for unknown fields
        return FilterSet(self._schema, {**self._values, **changes})

    def with_search(self, text: str) -> "FilterSet":
        field = self._schema.search_field
        if field is None:
            return self
        return self.replace(**{field.name: text})

    def is_active(self) -> bool:
        """True when at least one field narrows the result set."""
        for f in self._schema:
            value = self._values[f.name]
            if f.kind is FieldKind.TEXT:
                if value.strip():
                    return True
            elif value:
                return True
        return False

    def to_query_params(self, *, include_search: bool = True) -> list[tuple[str, str]]:
        """Encode as query-string pairs.

        Unset single-choice fields are omitted, multi-choice members are sent
        as one repeated key each and the search text goes out as ``search``
        only when non-blank.
        """
        params: list[tuple[str, str]] = []
        for f in self._schema:
            value = self._values[f.name]
            if f.kind is FieldKind.TEXT:
                text = value.strip()
                if text and include_search:
                    params.append(("search", text))
            elif f.kind is FieldKind.SINGLE:
                if value is not None:
                    params.append((f.param_name, value))
            else:
                params.extend((f.param_name, member) for member in sorted(value))
        return params

    def to_json(self) -> dict[str, Any]:
        return json.loads(self._canonical)

    @classmethod
    def from_json(cls, schema: FilterSchema, data: Any) -> "FilterSet":
        if not isinstance(data, Mapping):
            _log.warning("filters.invalid_payload", payload_type=type(data).__name__)
            return cls(schema, {})
        restored = dict(data)
        for f in schema:
            if f.name in restored:
                restored[f.name] = f.restore(restored[f.name])
        return cls(schema, restored)


__all__ = ["FilterSet"]
