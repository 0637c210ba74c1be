"""Application options – RemoteOption and item formatting."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any, Iterable


@dataclasses.dataclass(frozen=True)
class RemoteOption:
    """A selectable entry of a searchable picker."""
    value: str
    label: str


def format_option(item: Any) -> RemoteOption:
    """Default mapping of a search item ``{id?, name, value?}`` to an option.

    Items with an ``id`` select by id and display their name; otherwise the
    explicit ``value`` (or the name itself) is selected.
    """
    if isinstance(item, RemoteOption):
        return item
    d = item if isinstance(item, Mapping) else vars(item)
    name = str(d.get("name", ""))
    if d.get("id") is not None:
        return RemoteOption(value=str(d["id"]), label=name or str(d["id"]))
    value = d.get("value")
    if value is not None:
        return RemoteOption(value=str(value), label=name or str(value))
    return RemoteOption(value=name, label=name)


def merge_with_selection(options: Iterable[RemoteOption], selected: Iterable[str]) -> list[RemoteOption]:
    """Fetched options followed by selected values missing from them.

    A missing selection is shown with its raw value as label so it never
    disappears from the picker.  The result is unique by value.
    """
    merged: list[RemoteOption] = []
    seen: set[str] = set()
    for option in options:
        if option.value not in seen:
            seen.add(option.value)
            merged.append(option)
    for value in selected:
        if value not in seen:
            seen.add(value)
            merged.append(RemoteOption(value=value, label=value))
    return merged


__all__ = ["RemoteOption", "format_option", "merge_with_selection"]
