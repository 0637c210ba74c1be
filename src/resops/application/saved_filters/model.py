"""Application saved filters – SavedFilter record and its wire form."""
from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any

from resops.kernel.errors import SerializationError


def _parse_datetime(value: Any, field: str) -> datetime:
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError as exc:
        raise SerializationError(f"Saved filter field '{field}' is not a timestamp: {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class NewSavedFilter:
    """Payload of a save action, before the store assigns id and timestamps."""
    name: str
    page_type: str
    filters: dict[str, Any]
    created_by: str
    description: str | None = None
    shared: bool = False

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "pageType": self.page_type,
            "filters": self.filters,
            "createdBy": self.created_by,
            "shared": self.shared,
        }
        if self.description:
            payload["description"] = self.description
        return payload


@dataclasses.dataclass(frozen=True)
class SavedFilter:
    """A named filter snapshot scoped to one page type.

    ``filters`` is kept as opaque JSON; it is only interpreted against a
    :class:`~resops.application.filters.FilterSchema` when applied.
    """
    id: str
    name: str
    page_type: str
    filters: dict[str, Any]
    created_by: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    shared: bool = False

    @classmethod
    def from_payload(cls, payload: Any) -> "SavedFilter":
        if not isinstance(payload, dict):
            raise SerializationError(f"Saved filter payload must be an object, got {type(payload).__name__}")
        try:
            filters = payload.get("filters") or {}
            return cls(
                id=str(payload["id"]),
                name=str(payload["name"]),
                page_type=str(payload["pageType"]),
                filters=filters if isinstance(filters, dict) else {},
                created_by=str(payload.get("createdBy") or ""),
                created_at=_parse_datetime(payload["createdAt"], "createdAt"),
                updated_at=_parse_datetime(payload.get("updatedAt", payload["createdAt"]), "updatedAt"),
                description=payload.get("description") or None,
                shared=bool(payload.get("shared", False)),
            )
        except KeyError as exc:
            raise SerializationError(f"Saved filter payload is missing {exc.args[0]!r}") from exc

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "pageType": self.page_type,
            "filters": self.filters,
            "shared": self.shared,
            "createdBy": self.created_by,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


__all__ = ["NewSavedFilter", "SavedFilter"]
