"""Run a callback once input has been quiet for a fixed interval."""
from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None:  # pragma: no cover - protocol
        ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


def _loop_scheduler(delay: float, callback: Callable[[], None]) -> TimerHandle:
    return asyncio.get_running_loop().call_later(delay, callback)


class Debouncer:
    """Each ``trigger`` cancels the pending call and restarts the wait."""

    def __init__(
        self,
        delay: float,
        callback: Callable[..., Any],
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        if delay <= 0:
            raise ValueError("delay must be positive")
        self.delay = delay
        self._callback = callback
        self._scheduler = scheduler or _loop_scheduler
        self._handle: Optional[TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, *args: Any) -> None:
        self.cancel()
        self._handle = self._scheduler(self.delay, lambda: self._fire(args))

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, args: tuple) -> None:
        self._handle = None
        self._callback(*args)


__all__ = ["Debouncer", "Scheduler", "TimerHandle"]
