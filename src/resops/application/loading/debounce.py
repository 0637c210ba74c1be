"""Application loading – Debouncer (latest-value-wins input coalescing)."""
from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Generic, TypeVar

from resops.observability.logging import get_logger

T = TypeVar("T")

_log = get_logger(__name__)


class Debouncer(Generic[T]):
    """Emit the latest pushed value once *delay_ms* passed without a new push.

    Every push restarts the timer.  There is no "value unchanged" shortcut:
    a value that reverts within the window still emits once.  After
    :meth:`close` pending emissions are cancelled and pushes are ignored.

    *callback* may be a plain function or return an awaitable, which is run
    as a task on the current loop.  Must be used from inside a running loop.
    """

    def __init__(self, delay_ms: int, callback: Callable[[T], Any]) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must not be negative")
        self._delay = delay_ms / 1000.0
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[Any]] = set()
        self._closed = False
        self.emissions = 0

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, value: T) -> None:
        if self._closed:
            return
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay, self._fire, value)

    def cancel(self) -> None:
        """Drop the pending emission, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def close(self) -> None:
        self._closed = True
        self.cancel()
        for task in list(self._tasks):
            task.cancel()

    def _fire(self, value: T) -> None:
        self._handle = None
        if self._closed:
            return
        self.emissions += 1
        result = self._callback(value)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            _log.error("debounce.callback_failed", exc_info=task.exception())

    async def drain(self) -> None:
        """Wait for callbacks already started by emissions to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


__all__ = ["Debouncer"]
