"""Interval - fires on_tick every period milliseconds."""
from __future__ import annotations

from typing import Callable

from tick_time.signal import Signal
from tick_time.types import Scheduler, clamp_ms


def _noop() -> None:
    return None


class Interval:
    """Repeating tick source.

    ``on_tick`` listeners receive the scheduler time of each tick. An
    interval that is never cancelled keeps its scheduler entry alive;
    owners must call ``cancel()`` when done with it.
    """

    def __init__(self, scheduler: Scheduler, period: float, auto_start: bool = True) -> None:
        self._scheduler = scheduler
        self._period = clamp_ms(period)
        self._on_tick: Signal[float] = Signal()
        self._running = False
        self._canceller: Callable[[], None] = _noop

        if auto_start:
            self.start()

    @property
    def on_tick(self) -> Signal[float]:
        return self._on_tick

    @property
    def period(self) -> float:
        return self._period

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Start ticking. No-op if already running."""
        if self._running:
            return
        self._running = True

        handle = self._scheduler.schedule_repeating(self._tick, self._period)

        def cancel() -> None:
            self._scheduler.cancel_repeating(handle)
            self._canceller = _noop

        self._canceller = cancel

    def cancel(self) -> None:
        """Stop ticking. Safe to call repeatedly."""
        self._canceller()
        self._running = False

    def reset(self, period: float) -> None:
        """Stop and change the period. Call ``start()`` to resume."""
        self.cancel()
        self._period = clamp_ms(period)

    def _tick(self) -> None:
        self._on_tick.fire(self._scheduler.now())

    def __repr__(self) -> str:
        state = "running" if self._running else "stopped"
        return f"<Interval {self._period}ms {state}>"
