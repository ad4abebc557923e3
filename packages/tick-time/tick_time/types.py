"""Shared type aliases, errors, and the scheduler protocol."""
from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

Handle = int
TimerCallback = Callable[..., Any]


class CancellationError(Exception):
    """Raised into a Delay's result when it is cancelled with reject_on_cancel."""


@runtime_checkable
class Scheduler(Protocol):
    """Clock plus timer registry that every time primitive is built on.

    All times are milliseconds. Negative or missing periods and delays are
    clamped to 0. Cancelling an unknown or already-cancelled handle is a
    no-op.
    """

    def now(self) -> float:
        """Current scheduler time in milliseconds."""
        ...

    def schedule_repeating(
        self, callback: TimerCallback, period: float | None = 0, *args: Any
    ) -> Handle:
        """Call ``callback(*args)`` every ``period`` ms until cancelled."""
        ...

    def cancel_repeating(self, handle: Handle) -> None:
        ...

    def schedule_once(
        self, callback: TimerCallback, delay: float | None = 0, *args: Any
    ) -> Handle:
        """Call ``callback(*args)`` once after ``delay`` ms."""
        ...

    def cancel_once(self, handle: Handle) -> None:
        ...


def clamp_ms(value: float | None) -> float:
    """Clamp a period or delay to a non-negative number (None counts as 0)."""
    if not value:
        return 0
    return max(value, 0)
