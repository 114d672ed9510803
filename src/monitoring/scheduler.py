"""Timers for the change monitor's debounce and the auto-start settle delay."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Runs a zero-argument callback once after *delay* seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall: ...


class AsyncioScheduler:
    """:class:`Scheduler` on an asyncio event loop.

    The loop is looked up on first use so the scheduler can be created before
    the server's loop is running.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        if self._loop is None or self._loop.is_closed():
            self._loop = asyncio.get_running_loop()
        return self._loop.call_later(delay, callback)
