"""tick-time - Cancellable intervals, delays and condition waits on a pluggable clock."""
from __future__ import annotations

from tick_time.config import TimeConfig
from tick_time.context import (
    TimeContext,
    default_context,
    delay,
    get_scheduler,
    interval,
    reset_scheduler,
    set_scheduler,
    until,
    while_,
)
from tick_time.deferred import Deferred
from tick_time.delay import Delay
from tick_time.host import AsyncioScheduler
from tick_time.interval import Interval
from tick_time.scheduler import DeterministicScheduler
from tick_time.signal import Signal
from tick_time.systems import make_time_system
from tick_time.types import CancellationError, Handle, Scheduler
from tick_time.until import Until

__all__ = [
    "AsyncioScheduler",
    "CancellationError",
    "Deferred",
    "Delay",
    "DeterministicScheduler",
    "Handle",
    "Interval",
    "Scheduler",
    "Signal",
    "TimeConfig",
    "TimeContext",
    "Until",
    "default_context",
    "delay",
    "get_scheduler",
    "interval",
    "make_time_system",
    "reset_scheduler",
    "set_scheduler",
    "until",
    "while_",
]
