"""Until - an awaitable that resolves once a predicate holds."""
from __future__ import annotations

import logging
from typing import Callable

from tick_time.deferred import Deferred
from tick_time.types import Handle, Scheduler

logger = logging.getLogger(__name__)

Predicate = Callable[[], bool]


class Until(Deferred):
    """Polls ``predicate`` on every scheduler step until it returns True.

    The first poll happens on the next scheduler step, never inside
    ``start()``. Once satisfied the result is fulfilled, polling stops and
    the predicate is released. There is no cancel; a settled Until stays
    settled and ``start()`` becomes a no-op.
    """

    def __init__(self, scheduler: Scheduler, predicate: Predicate, auto_start: bool = True) -> None:
        super().__init__()
        self._scheduler = scheduler
        self._predicate: Predicate | None = predicate
        self._started = False
        self._handle: Handle | None = None

        if auto_start:
            self.start()

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> Until:
        """Begin polling. Returns self for awaiting."""
        if self._started:
            return self
        self._started = True
        if self._future.done():
            self._renew()
        self._handle = self._scheduler.schedule_repeating(self._poll, 0)
        return self

    def _poll(self) -> None:
        if self._predicate is None or not self._predicate():
            return
        if self._handle is not None:
            self._scheduler.cancel_repeating(self._handle)
            self._handle = None
        self._predicate = None
        logger.debug("until_satisfied")
        self._fulfill()

    def __repr__(self) -> str:
        if self.done():
            state = "fulfilled"
        elif self.running:
            state = "running"
        else:
            state = "idle"
        return f"<Until {state}>"


def negate(predicate: Predicate) -> Predicate:
    """Wrap ``predicate`` so a While can be expressed as an Until."""

    def negated() -> bool:
        return not predicate()

    return negated
