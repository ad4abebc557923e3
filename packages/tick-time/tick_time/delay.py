"""Delay - an awaitable that resolves after a duration in milliseconds."""
from __future__ import annotations

import logging
from typing import Callable

from tick_time.deferred import Deferred
from tick_time.types import CancellationError, Handle, Scheduler, clamp_ms

logger = logging.getLogger(__name__)


def _noop() -> None:
    return None


class Delay(Deferred):
    """One-shot timer exposed as an awaitable.

    Lifecycle: idle -> running -> fulfilled or rejected -> idle. Calling
    ``start()`` after the result settled (or after a cancel) begins a new
    run with a fresh result, so one Delay can be awaited many times.

    Cancelling a running delay rejects the result with CancellationError
    when ``reject_on_cancel`` is set; otherwise the result of that run never
    settles.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        duration: float,
        reject_on_cancel: bool = True,
        auto_start: bool = True,
    ) -> None:
        super().__init__()
        self._scheduler = scheduler
        self._duration = clamp_ms(duration)
        self._reject_on_cancel = reject_on_cancel
        self._running = False
        # False once the current result settled or was abandoned
        self._initialized = True
        self._canceller: Callable[[], None] = _noop

        if auto_start:
            self.start()

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def reject_on_cancel(self) -> bool:
        return self._reject_on_cancel

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> Delay:
        """Start the delay if it is not running. Returns self for awaiting."""
        if self._running:
            return self

        if not self._initialized:
            self._renew()
            self._initialized = True

        self._running = True
        handle = self._scheduler.schedule_once(self._complete, self._duration)
        self._canceller = lambda: self._abort(handle)
        return self

    def cancel(self) -> None:
        """Cancel a running delay. No-op when idle."""
        self._canceller()

    def reset(self, duration: float) -> None:
        """Cancel and change the duration. Does not restart."""
        self.cancel()
        self._duration = clamp_ms(duration)

    def _complete(self) -> None:
        self._running = False
        self._initialized = False
        self._canceller = _noop
        self._fulfill()

    def _abort(self, handle: Handle) -> None:
        self._scheduler.cancel_once(handle)
        self._canceller = _noop
        self._running = False
        self._initialized = False
        logger.debug(
            "delay_cancelled",
            extra={"delay.duration_ms": self._duration, "delay.rejected": self._reject_on_cancel},
        )
        # settle last: done-callbacks run synchronously and may start() again
        if self._reject_on_cancel:
            self._reject(CancellationError("cancelled"))

    def __repr__(self) -> str:
        if self._running:
            state = "running"
        elif self.done():
            state = "rejected" if self.exception() is not None else "fulfilled"
        else:
            state = "idle"
        return f"<Delay {self._duration}ms {state}>"
