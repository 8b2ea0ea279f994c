"""Cancellable delayed callbacks on the running event loop."""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Minimal timer interface used by components that expire or retry."""

    def time(self) -> float:
        """Current scheduler time in seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run *callback* after *delay* seconds; the handle cancels it."""


class LoopScheduler:
    """Scheduler backed by the running asyncio loop.

    The loop is looked up on each call so one instance can be created
    before the loop starts and used from any coroutine or callback on it.
    """

    def time(self) -> float:
        return asyncio.get_running_loop().time()

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)
