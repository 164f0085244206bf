"""Tests for the scheduler module."""

from __future__ import annotations

import asyncio

import pytest

from pythermostat.scheduler import AsyncioScheduler, ManualScheduler


class TestManualScheduler:
    """Tests for ManualScheduler."""

    async def test_once_fires_at_due_time(self) -> None:
        """Test a one-shot timer fires exactly when due and only once."""
        scheduler = ManualScheduler()
        calls: list[float] = []

        scheduler.schedule_once(0.3, lambda: calls.append(scheduler.now))

        await scheduler.advance(0.29)
        assert calls == []

        await scheduler.advance(0.02)
        assert calls == [pytest.approx(0.3)]

        await scheduler.advance(10)
        assert len(calls) == 1
        assert scheduler.pending_count == 0

    async def test_repeating_fires_every_interval(self) -> None:
        """Test a repeating timer fires once per interval."""
        scheduler = ManualScheduler()
        calls: list[float] = []

        scheduler.schedule_repeating(2.0, lambda: calls.append(scheduler.now))
        await scheduler.advance(7.0)

        assert calls == [pytest.approx(2.0), pytest.approx(4.0), pytest.approx(6.0)]
        assert scheduler.now == pytest.approx(7.0)
        assert scheduler.pending_count == 1

    async def test_cancel(self) -> None:
        """Test cancelled timers never fire."""
        scheduler = ManualScheduler()
        calls: list[str] = []

        timer_id = scheduler.schedule_once(1.0, lambda: calls.append("fired"))

        assert scheduler.cancel(timer_id) is True
        assert scheduler.cancel(timer_id) is False
        await scheduler.advance(2.0)
        assert calls == []

    async def test_cancel_unknown(self) -> None:
        """Test cancelling an unknown id returns False."""
        assert ManualScheduler().cancel(42) is False

    async def test_cancel_all(self) -> None:
        """Test cancel_all drops every timer."""
        scheduler = ManualScheduler()
        scheduler.schedule_once(1.0, lambda: None)
        scheduler.schedule_repeating(1.0, lambda: None)

        assert scheduler.cancel_all() == 2
        assert scheduler.pending_count == 0

    async def test_awaitable_callbacks_complete(self) -> None:
        """Test coroutine callbacks finish before advance returns."""
        scheduler = ManualScheduler()
        done: list[bool] = []

        async def work() -> None:
            await asyncio.sleep(0)
            done.append(True)

        scheduler.schedule_once(0.5, work)
        await scheduler.advance(0.5)

        assert done == [True]

    async def test_fires_in_time_order(self) -> None:
        """Test timers fire in due-time order regardless of scheduling order."""
        scheduler = ManualScheduler()
        order: list[str] = []

        scheduler.schedule_once(0.3, lambda: order.append("late"))
        scheduler.schedule_once(0.1, lambda: order.append("early"))
        scheduler.schedule_repeating(0.2, lambda: order.append("tick"))
        await scheduler.advance(0.45)

        assert order == ["early", "tick", "late", "tick"]

    async def test_callback_can_reschedule(self) -> None:
        """Test timers scheduled from a callback fire within the same advance."""
        scheduler = ManualScheduler()
        calls: list[float] = []

        def first() -> None:
            calls.append(scheduler.now)
            scheduler.schedule_once(0.2, lambda: calls.append(scheduler.now))

        scheduler.schedule_once(0.1, first)
        await scheduler.advance(1.0)

        assert calls == [pytest.approx(0.1), pytest.approx(0.3)]

    async def test_invalid_delays(self) -> None:
        """Test invalid delays are rejected."""
        scheduler = ManualScheduler()

        with pytest.raises(ValueError, match="positive"):
            scheduler.schedule_repeating(0, lambda: None)
        with pytest.raises(ValueError, match="negative"):
            scheduler.schedule_once(-1, lambda: None)
        with pytest.raises(ValueError, match="negative"):
            await scheduler.advance(-1)

    async def test_shutdown_cancels_timers(self) -> None:
        """Test shutdown drops every pending timer."""
        scheduler = ManualScheduler()
        scheduler.schedule_repeating(1.0, lambda: None)

        await scheduler.shutdown()

        assert scheduler.pending_count == 0


class TestAsyncioScheduler:
    """Tests for AsyncioScheduler on a real event loop."""

    async def test_once(self) -> None:
        """Test a one-shot timer fires."""
        scheduler = AsyncioScheduler()
        fired = asyncio.Event()

        scheduler.schedule_once(0.01, fired.set)

        await asyncio.wait_for(fired.wait(), timeout=1.0)
        assert scheduler.pending_count == 0

    async def test_repeating(self) -> None:
        """Test a repeating timer keeps firing until cancelled."""
        scheduler = AsyncioScheduler()
        calls: list[int] = []
        enough = asyncio.Event()

        def tick() -> None:
            calls.append(1)
            if len(calls) >= 3:
                enough.set()

        timer_id = scheduler.schedule_repeating(0.01, tick)
        await asyncio.wait_for(enough.wait(), timeout=1.0)

        assert scheduler.cancel(timer_id) is True
        count = len(calls)
        await asyncio.sleep(0.05)
        assert len(calls) == count

    async def test_cancel_before_fire(self) -> None:
        """Test a cancelled timer never fires."""
        scheduler = AsyncioScheduler()
        calls: list[int] = []

        timer_id = scheduler.schedule_once(0.02, lambda: calls.append(1))
        scheduler.cancel(timer_id)
        await asyncio.sleep(0.05)

        assert calls == []

    async def test_coroutine_callback_runs_as_task(self) -> None:
        """Test awaitables returned by callbacks are run."""
        scheduler = AsyncioScheduler()
        done = asyncio.Event()

        async def work() -> None:
            done.set()

        scheduler.schedule_once(0, work)

        await asyncio.wait_for(done.wait(), timeout=1.0)

    async def test_failing_callback_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a failing task is logged and the repeating timer survives."""
        scheduler = AsyncioScheduler()
        calls: list[int] = []
        enough = asyncio.Event()

        async def boom() -> None:
            calls.append(1)
            if len(calls) >= 2:
                enough.set()
            msg = "boom"
            raise RuntimeError(msg)

        scheduler.schedule_repeating(0.01, boom)
        await asyncio.wait_for(enough.wait(), timeout=1.0)
        await asyncio.sleep(0)
        await scheduler.shutdown()

        assert "Scheduled task" in caplog.text

    async def test_shutdown_cancels_running_tasks(self) -> None:
        """Test shutdown cancels timers and in-flight callback tasks."""
        scheduler = AsyncioScheduler()
        started = asyncio.Event()

        async def slow() -> None:
            started.set()
            await asyncio.sleep(10)

        scheduler.schedule_once(0, slow)
        scheduler.schedule_once(10, lambda: None)
        await asyncio.wait_for(started.wait(), timeout=1.0)

        await scheduler.shutdown()

        assert scheduler.pending_count == 0
        assert scheduler.active_tasks == 0
