"""AsyncioScheduler - delegates timers to an asyncio event loop."""
from __future__ import annotations

import asyncio
import itertools
import logging
import time
from typing import Any

from tick_time.types import Handle, TimerCallback, clamp_ms

logger = logging.getLogger(__name__)


class AsyncioScheduler:
    """Scheduler backed by ``loop.call_later``; ``now()`` is wall-clock ms.

    When no loop is given, the running loop is looked up each time work is
    scheduled, so an instance can be created outside of any loop (for
    example as a process-wide default) and used from inside one later.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._ids = itertools.count(1)
        self._repeating: dict[Handle, asyncio.TimerHandle] = {}
        self._once: dict[Handle, asyncio.TimerHandle] = {}

    @property
    def pending_count(self) -> int:
        return len(self._repeating) + len(self._once)

    def now(self) -> float:
        return time.time() * 1000

    def schedule_repeating(
        self, callback: TimerCallback, period: float | None = 0, *args: Any
    ) -> Handle:
        period = clamp_ms(period)
        handle = next(self._ids)

        def run() -> None:
            # re-arm first so the callback can cancel its own handle
            self._repeating[handle] = self._call_later(period, run)
            callback(*args)

        self._repeating[handle] = self._call_later(period, run)
        logger.debug(
            "timer_scheduled",
            extra={"timer.handle": handle, "timer.kind": "repeating", "timer.period_ms": period},
        )
        return handle

    def cancel_repeating(self, handle: Handle) -> None:
        timer = self._repeating.pop(handle, None)
        if timer is not None:
            timer.cancel()
            logger.debug(
                "timer_cancelled",
                extra={"timer.handle": handle, "timer.kind": "repeating"},
            )

    def schedule_once(
        self, callback: TimerCallback, delay: float | None = 0, *args: Any
    ) -> Handle:
        delay = clamp_ms(delay)
        handle = next(self._ids)

        def run() -> None:
            del self._once[handle]
            callback(*args)

        self._once[handle] = self._call_later(delay, run)
        logger.debug(
            "timer_scheduled",
            extra={"timer.handle": handle, "timer.kind": "once", "timer.delay_ms": delay},
        )
        return handle

    def cancel_once(self, handle: Handle) -> None:
        timer = self._once.pop(handle, None)
        if timer is not None:
            timer.cancel()
            logger.debug(
                "timer_cancelled",
                extra={"timer.handle": handle, "timer.kind": "once"},
            )

    def _call_later(self, delay_ms: float, fn: TimerCallback) -> asyncio.TimerHandle:
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000, fn)
