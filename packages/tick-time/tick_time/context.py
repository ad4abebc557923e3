"""TimeContext - holds the active scheduler and builds primitives on it.

Module-level functions operate on a process-wide default context. Tests and
independent simulations should create their own TimeContext instead.
"""
from __future__ import annotations

from tick_time.config import TimeConfig
from tick_time.delay import Delay
from tick_time.host import AsyncioScheduler
from tick_time.interval import Interval
from tick_time.scheduler import DeterministicScheduler
from tick_time.types import Scheduler
from tick_time.until import Predicate, Until, negate


class TimeContext:
    """Active scheduler plus factory methods for Interval, Delay and Until.

    Primitives keep the scheduler they were built with; swapping the
    scheduler only affects primitives created afterwards.
    """

    def __init__(
        self, scheduler: Scheduler | None = None, config: TimeConfig | None = None
    ) -> None:
        self.config: TimeConfig = config if config is not None else TimeConfig()
        self._scheduler: Scheduler = scheduler if scheduler is not None else AsyncioScheduler()

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    def set_scheduler(self, scheduler: Scheduler) -> None:
        self._scheduler = scheduler

    def reset_scheduler(self) -> None:
        """Go back to a fresh asyncio-backed scheduler."""
        self._scheduler = AsyncioScheduler()

    def deterministic(self, start_time: float = 0.0) -> DeterministicScheduler:
        """Install and return a DeterministicScheduler starting at ``start_time``."""
        scheduler = DeterministicScheduler(start_time, catch_up=self.config.catch_up)
        self._scheduler = scheduler
        return scheduler

    # --- Factories ---

    def interval(self, period: float, auto_start: bool | None = None) -> Interval:
        """Create an Interval ticking every ``period`` ms."""
        return Interval(self._scheduler, period, self._auto_start(auto_start))

    def delay(
        self,
        duration: float,
        reject_on_cancel: bool | None = None,
        auto_start: bool | None = None,
    ) -> Delay:
        """Create a Delay that resolves after ``duration`` ms."""
        if reject_on_cancel is None:
            reject_on_cancel = self.config.reject_on_cancel
        return Delay(self._scheduler, duration, reject_on_cancel, self._auto_start(auto_start))

    def until(self, predicate: Predicate, auto_start: bool | None = None) -> Until:
        """Create an Until that resolves once ``predicate()`` is True."""
        return Until(self._scheduler, predicate, self._auto_start(auto_start))

    def while_(self, predicate: Predicate, auto_start: bool | None = None) -> Until:
        """Create an Until that resolves once ``predicate()`` is False."""
        return Until(self._scheduler, negate(predicate), self._auto_start(auto_start))

    def _auto_start(self, auto_start: bool | None) -> bool:
        return self.config.auto_start if auto_start is None else auto_start


_default = TimeContext()


def default_context() -> TimeContext:
    return _default


def get_scheduler() -> Scheduler:
    return _default.scheduler


def set_scheduler(scheduler: Scheduler) -> None:
    _default.set_scheduler(scheduler)


def reset_scheduler() -> None:
    _default.reset_scheduler()


def interval(period: float, auto_start: bool | None = None) -> Interval:
    return _default.interval(period, auto_start)


def delay(
    duration: float,
    reject_on_cancel: bool | None = None,
    auto_start: bool | None = None,
) -> Delay:
    return _default.delay(duration, reject_on_cancel, auto_start)


def until(predicate: Predicate, auto_start: bool | None = None) -> Until:
    return _default.until(predicate, auto_start)


def while_(predicate: Predicate, auto_start: bool | None = None) -> Until:
    return _default.while_(predicate, auto_start)
