import asyncio
from typing import Callable, List

import pytest

from errexplain.debounce import Debouncer


class FakeHandle:
    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeClock:
    """Manual scheduler standing in for the event loop."""

    def __init__(self) -> None:
        self.now = 0.0
        self.handles: List[FakeHandle] = []

    def schedule(self, delay: float, callback: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for handle in list(self.handles):
            if not handle.cancelled and handle.when <= self.now:
                self.handles.remove(handle)
                handle.callback()


def test_fires_once_after_quiet_period() -> None:
    clock = FakeClock()
    calls = []
    debouncer = Debouncer(0.9, calls.append, scheduler=clock.schedule)

    debouncer.trigger("a")
    clock.advance(0.5)
    debouncer.trigger("ab")
    clock.advance(0.5)
    assert calls == []
    assert debouncer.pending

    clock.advance(0.4)
    assert calls == ["ab"]
    assert not debouncer.pending


def test_cancel_drops_pending_call() -> None:
    clock = FakeClock()
    calls = []
    debouncer = Debouncer(0.9, calls.append, scheduler=clock.schedule)

    debouncer.trigger("a")
    debouncer.cancel()
    clock.advance(5)

    assert calls == []


def test_delay_must_be_positive() -> None:
    with pytest.raises(ValueError):
        Debouncer(0, print)


def test_default_scheduler_uses_running_loop() -> None:
    calls = []

    async def main() -> None:
        debouncer = Debouncer(0.01, calls.append)
        debouncer.trigger("first")
        debouncer.trigger("second")
        await asyncio.sleep(0.05)

    asyncio.run(main())

    assert calls == ["second"]
