"""Observability – structured logging."""
from resops.observability.logging import JsonLoggerFactory, bind_view, get_logger

__all__ = ["JsonLoggerFactory", "bind_view", "get_logger"]
