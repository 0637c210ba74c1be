"""Observability – structlog configuration and logger helpers."""
from resops.observability.logging.factory import JsonLoggerFactory
from resops.observability.logging.processors import bind_view, get_logger

__all__ = ["JsonLoggerFactory", "bind_view", "get_logger"]
