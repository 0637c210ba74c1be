"""Observability – get_logger helper and view-scoped context binding."""
from __future__ import annotations

from typing import Any

import structlog


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


def bind_view(view_id: str) -> None:
    """Attach ``view_id`` to every log event emitted in the current context."""
    structlog.contextvars.bind_contextvars(view_id=view_id)


__all__ = ["bind_view", "get_logger"]
