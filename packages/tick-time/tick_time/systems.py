"""System factory that drives a DeterministicScheduler from engine ticks.

The returned callable follows the tick engine's ``(world, ctx)`` system
signature and only reads ``ctx.dt``. This package does not depend on the
engine; any loop that passes an object with a ``dt`` attribute (seconds)
can drive it.
"""
from __future__ import annotations

from typing import Any, Callable, Protocol

from tick_time.scheduler import DeterministicScheduler


class _HasDt(Protocol):
    """The part of the engine's TickContext this system reads."""

    dt: float


def make_time_system(
    scheduler: DeterministicScheduler,
) -> Callable[[Any, _HasDt], None]:
    """Return a system that advances ``scheduler`` by ``ctx.dt`` each tick.

    ``ctx.dt`` is in seconds (1 / tps); the scheduler runs on milliseconds.
    """

    def time_system(world: Any, ctx: _HasDt) -> None:
        scheduler.advance(ctx.dt * 1000)

    return time_system
