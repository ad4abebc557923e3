"""DeterministicScheduler - a scheduler whose clock only moves when told to.

The typical driver is a game loop: every frame calls ``advance(dt_ms)`` and
any repeating or one-shot work that became due runs synchronously inside
that call. No host timers are involved, so runs are fully reproducible.
"""
from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass
from typing import Any

from tick_time.types import Handle, TimerCallback, clamp_ms

logger = logging.getLogger(__name__)

# Handles cycle through the range of integers a double can represent exactly.
MIN_HANDLE = -(2**53 - 1)
MAX_HANDLE = 2**53 - 1

# Default upper bound on catch-up fires of one repeating item per advance.
MAX_CATCH_UP = 1000

_REPEATING_RANK = 0
_ONCE_RANK = 1


@dataclass(slots=True)
class _PendingItem:
    """A scheduled callback. ``period`` is None for one-shot items."""

    handle: Handle
    callback: TimerCallback
    args: tuple[Any, ...]
    due_at: float
    generation: int
    seq: int
    period: float | None = None


class DeterministicScheduler:
    """Scheduler driven by explicit ``advance(delta_ms)`` calls.

    With ``catch_up`` enabled (the default) a single advance fires every
    elapsed period of a repeating item, in logical-time order, and ``now()``
    reads the item's due time while its callback runs. An item fires at most
    ``max_catch_up`` times per advance; past that its missed ticks are
    dropped and it is re-armed one period after the new time. With
    ``catch_up`` disabled each due item fires at most once per advance,
    repeating items are re-armed relative to the new time, and ``now()``
    keeps reading the previous time until the pass is over. In both modes
    zero-period items fire once per advance and see the clock as it was
    before the advance.

    Repeating items fire before one-shot items that are due at the same
    time; otherwise insertion order breaks ties. Items scheduled from inside
    a callback become eligible on the next advance.
    """

    def __init__(
        self,
        start_time: float = 0.0,
        catch_up: bool = True,
        max_catch_up: int = MAX_CATCH_UP,
    ) -> None:
        if max_catch_up < 1:
            raise ValueError("max_catch_up must be at least 1")
        self._now = start_time
        self._catch_up = catch_up
        self._max_catch_up = max_catch_up
        self._repeating: dict[Handle, _PendingItem] = {}
        self._once: dict[Handle, _PendingItem] = {}
        self._next_handle = MIN_HANDLE
        self._seq = itertools.count()
        self._generation = 0

    @property
    def catch_up(self) -> bool:
        return self._catch_up

    @property
    def max_catch_up(self) -> int:
        return self._max_catch_up

    @property
    def pending_count(self) -> int:
        """Number of live repeating and one-shot items."""
        return len(self._repeating) + len(self._once)

    def now(self) -> float:
        return self._now

    # --- Scheduling ---

    def schedule_repeating(
        self, callback: TimerCallback, period: float | None = 0, *args: Any
    ) -> Handle:
        period = clamp_ms(period)
        handle = self._generate_handle()
        self._repeating[handle] = _PendingItem(
            handle=handle,
            callback=callback,
            args=args,
            due_at=self._now + period,
            generation=self._generation,
            seq=next(self._seq),
            period=period,
        )
        logger.debug(
            "timer_scheduled",
            extra={"timer.handle": handle, "timer.kind": "repeating", "timer.period_ms": period},
        )
        return handle

    def cancel_repeating(self, handle: Handle) -> None:
        if self._repeating.pop(handle, None) is not None:
            logger.debug(
                "timer_cancelled",
                extra={"timer.handle": handle, "timer.kind": "repeating"},
            )

    def schedule_once(
        self, callback: TimerCallback, delay: float | None = 0, *args: Any
    ) -> Handle:
        delay = clamp_ms(delay)
        handle = self._generate_handle()
        self._once[handle] = _PendingItem(
            handle=handle,
            callback=callback,
            args=args,
            due_at=self._now + delay,
            generation=self._generation,
            seq=next(self._seq),
        )
        logger.debug(
            "timer_scheduled",
            extra={"timer.handle": handle, "timer.kind": "once", "timer.delay_ms": delay},
        )
        return handle

    def cancel_once(self, handle: Handle) -> None:
        if self._once.pop(handle, None) is not None:
            logger.debug(
                "timer_cancelled",
                extra={"timer.handle": handle, "timer.kind": "once"},
            )

    # --- Advancing ---

    def advance(self, delta: float) -> None:
        """Move the clock forward by ``delta`` ms and run whatever became due.

        A negative delta moves the clock backward and fires nothing that was
        not already due. Exceptions raised by callbacks propagate; the clock
        still ends up at the target time.
        """
        current = self._now + delta
        self._generation += 1
        fired = 0
        try:
            if self._catch_up:
                fired = self._run_catch_up(current)
            else:
                fired = self._run_single_pass(current)
        finally:
            self._now = current
        logger.debug(
            "scheduler_advanced",
            extra={"scheduler.now_ms": current, "scheduler.fired": fired},
        )

    def _run_single_pass(self, current: float) -> int:
        fired = 0
        for item in list(self._repeating.values()):
            if not self._eligible(self._repeating, item, current):
                continue
            item.due_at = current + item.period
            item.callback(*item.args)
            fired += 1

        for item in list(self._once.values()):
            if not self._eligible(self._once, item, current):
                continue
            del self._once[item.handle]
            item.callback(*item.args)
            fired += 1
        return fired

    def _run_catch_up(self, current: float) -> int:
        # (due_at, rank, seq) orders by time, then repeating-first, then insertion
        heap: list[tuple[float, int, int, _PendingItem]] = []
        for rank, items in ((_REPEATING_RANK, self._repeating), (_ONCE_RANK, self._once)):
            for item in items.values():
                if self._eligible(items, item, current):
                    heap.append((item.due_at, rank, item.seq, item))
        heapq.heapify(heap)

        fired = 0
        counts: dict[Handle, int] = {}
        while heap:
            due_at, rank, seq, item = heapq.heappop(heap)
            items = self._repeating if rank == _REPEATING_RANK else self._once
            if items.get(item.handle) is not item:
                continue
            self._now = max(self._now, due_at)
            if item.period is None:
                del self._once[item.handle]
            else:
                count = counts.get(item.handle, 0) + 1
                counts[item.handle] = count
                item.due_at += item.period
                # zero-period items get one fire per advance
                if item.period > 0 and item.due_at <= current:
                    if count < self._max_catch_up:
                        heapq.heappush(heap, (item.due_at, rank, seq, item))
                    else:
                        item.due_at = current + item.period
            item.callback(*item.args)
            fired += 1
        return fired

    def _eligible(
        self, items: dict[Handle, _PendingItem], item: _PendingItem, current: float
    ) -> bool:
        return (
            items.get(item.handle) is item
            and item.generation < self._generation
            and item.due_at <= current
        )

    def _generate_handle(self) -> Handle:
        handle = self._next_handle
        self._next_handle += 1
        if self._next_handle == MAX_HANDLE:
            self._next_handle = MIN_HANDLE
        return handle
