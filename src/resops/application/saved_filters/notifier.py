"""Application saved filters – transient user notifications (toasts)."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

from resops.observability.logging import get_logger

_log = get_logger(__name__)


class NotificationLevel(str, Enum):
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str | None = None
    level: NotificationLevel = NotificationLevel.INFO


@runtime_checkable
class Notifier(Protocol):
    """Port: show a short-lived message to the user."""

    def notify(self, notification: Notification) -> None: ...


class InMemoryNotifier:
    """Fake Notifier that captures notifications."""

    def __init__(self) -> None:
        self.sent: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.sent.append(notification)

    @property
    def errors(self) -> list[Notification]:
        return [n for n in self.sent if n.level is NotificationLevel.ERROR]

    def reset(self) -> None:
        self.sent.clear()


class LoggingNotifier:
    """Notifier for headless use: notifications become log events."""

    def notify(self, notification: Notification) -> None:
        log = _log.error if notification.level is NotificationLevel.ERROR else _log.info
        log("notification", title=notification.title, description=notification.description)


__all__ = ["InMemoryNotifier", "LoggingNotifier", "Notification", "NotificationLevel", "Notifier"]
