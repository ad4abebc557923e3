"""Tests for Interval on a DeterministicScheduler."""
from __future__ import annotations

from tick_time import DeterministicScheduler, Interval


def _collect(interval: Interval) -> list[float]:
    ticks: list[float] = []
    interval.on_tick.add(ticks.append)
    return ticks


class TestTicking:
    def test_ticks_carry_scheduler_time(self) -> None:
        """interval(500) + advance(1100) ticks at 500 and 1000, not 1100."""
        s = DeterministicScheduler(0)
        ticks = _collect(Interval(s, 500))

        s.advance(1100)

        assert ticks == [500, 1000]

    def test_k_periods_give_k_ticks(self) -> None:
        s = DeterministicScheduler(0)
        ticks = _collect(Interval(s, 250))
        for _ in range(4):
            s.advance(250)
        assert ticks == [250, 500, 750, 1000]

    def test_no_tick_on_start(self) -> None:
        s = DeterministicScheduler(0)
        ticks = _collect(Interval(s, 100))
        assert ticks == []

    def test_zero_period_ticks_every_advance(self) -> None:
        s = DeterministicScheduler(0)
        ticks = _collect(Interval(s, 0))
        s.advance(16)
        s.advance(16)
        assert ticks == [0, 16]

    def test_negative_period_clamped(self) -> None:
        s = DeterministicScheduler(0)
        assert Interval(s, -20).period == 0

    def test_single_pass_scheduler_ticks_once_per_advance(self) -> None:
        s = DeterministicScheduler(0, catch_up=False)
        ticks = _collect(Interval(s, 500))
        s.advance(1100)
        assert len(ticks) == 1


class TestLifecycle:
    def test_auto_start_false(self) -> None:
        s = DeterministicScheduler(0)
        interval = Interval(s, 100, auto_start=False)
        ticks = _collect(interval)

        assert interval.running is False
        assert s.pending_count == 0
        s.advance(500)
        assert ticks == []

        interval.start()
        assert interval.running is True
        s.advance(100)
        assert ticks == [600]

    def test_start_twice_schedules_once(self) -> None:
        s = DeterministicScheduler(0)
        interval = Interval(s, 100)
        interval.start()
        interval.start()
        assert s.pending_count == 1

        ticks = _collect(interval)
        s.advance(100)
        assert ticks == [100]

    def test_cancel_stops_ticks(self) -> None:
        s = DeterministicScheduler(0)
        interval = Interval(s, 100)
        ticks = _collect(interval)
        s.advance(100)
        interval.cancel()

        s.advance(1000)

        assert ticks == [100]
        assert interval.running is False
        assert s.pending_count == 0

    def test_cancel_is_safe_to_repeat(self) -> None:
        s = DeterministicScheduler(0)
        interval = Interval(s, 100)
        interval.cancel()
        interval.cancel()
        assert interval.running is False

    def test_cancel_from_tick_listener(self) -> None:
        s = DeterministicScheduler(0)
        interval = Interval(s, 100)
        ticks: list[float] = []

        def listener(time: float) -> None:
            ticks.append(time)
            interval.cancel()

        interval.on_tick.add(listener)
        s.advance(1000)
        assert ticks == [100]

    def test_reset_changes_period_without_restarting(self) -> None:
        s = DeterministicScheduler(0)
        interval = Interval(s, 500)
        ticks = _collect(interval)
        s.advance(500)

        interval.reset(200)
        assert interval.period == 200
        assert interval.running is False
        s.advance(1000)
        assert ticks == [500]

        interval.start()
        s.advance(200)
        assert ticks == [500, 1700]

    def test_restart_after_cancel(self) -> None:
        s = DeterministicScheduler(0)
        interval = Interval(s, 100)
        ticks = _collect(interval)
        interval.cancel()
        interval.start()
        s.advance(100)
        assert ticks == [100]
        assert s.pending_count == 1

    def test_repr(self) -> None:
        s = DeterministicScheduler(0)
        assert repr(Interval(s, 100)) == "<Interval 100ms running>"
        assert repr(Interval(s, 100, auto_start=False)) == "<Interval 100ms stopped>"
