"""Infrastructure errors – transport, payload and local storage failures."""

from __future__ import annotations

from typing import Any

from resops.kernel.errors.base import ResopsError


class InfrastructureError(ResopsError):
    """I/O failure that is not a rule violation."""

    default_code = "infrastructure_error"


class TransportError(InfrastructureError):
    """Network failure or non-2xx answer from a list / filter endpoint."""

    default_code = "transport_error"

    def __init__(
        self,
        url: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Request to '{url}' failed", **kwargs)
        self.url = url
        self.status_code = status_code


class SerializationError(InfrastructureError):
    """A payload could not be encoded or decoded."""

    default_code = "serialization_error"


class PreferencesStorageError(InfrastructureError):
    """The local view-preferences storage could not be written."""

    default_code = "preferences_storage_error"

    def __init__(self, location: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or f"Could not write preferences to '{location}'", **kwargs)
        self.location = location


__all__ = [
    "InfrastructureError",
    "PreferencesStorageError",
    "SerializationError",
    "TransportError",
]
