"""Timer scheduling for polling cadence and debounce windows.

Components never touch the event loop's timers directly. They receive a
``Scheduler`` and use three operations:

- ``schedule_repeating(interval, callback)``: fixed-cadence timer (state polls)
- ``schedule_once(delay, callback)``: one-shot timer (debounce windows)
- ``cancel(timer_id)``: drop a pending timer

Callbacks take no arguments and may return an awaitable; the scheduler runs
it to completion. ``AsyncioScheduler`` drives real timers on the running loop,
``ManualScheduler`` keeps a virtual clock that tests advance explicitly.
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import itertools
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any


__all__ = [
    "AsyncioScheduler",
    "ManualScheduler",
    "Scheduler",
    "TimerCallback",
]

_LOGGER = logging.getLogger(__name__)

TimerCallback = Callable[[], Awaitable[Any] | None]


class Scheduler(ABC):
    """Abstract timer scheduler."""

    def __init__(self) -> None:
        """Initialize the timer id sequence."""
        self._ids = itertools.count(1)

    def _next_id(self) -> int:
        return next(self._ids)

    @staticmethod
    def _validate_delay(delay: float, *, repeating: bool) -> None:
        if repeating and delay <= 0:
            msg = f"Repeating interval must be positive, got {delay}"
            raise ValueError(msg)
        if delay < 0:
            msg = f"Delay must not be negative, got {delay}"
            raise ValueError(msg)

    @abstractmethod
    def schedule_repeating(self, interval: float, callback: TimerCallback) -> int:
        """Call ``callback`` every ``interval`` seconds until cancelled.

        Args:
            interval: Seconds between calls. The first call happens after one interval.
            callback: Zero-argument callable, optionally returning an awaitable.

        Returns:
            Timer id for ``cancel``.
        """

    @abstractmethod
    def schedule_once(self, delay: float, callback: TimerCallback) -> int:
        """Call ``callback`` once after ``delay`` seconds.

        Args:
            delay: Seconds to wait.
            callback: Zero-argument callable, optionally returning an awaitable.

        Returns:
            Timer id for ``cancel``.
        """

    @abstractmethod
    def cancel(self, timer_id: int) -> bool:
        """Cancel a pending timer.

        Args:
            timer_id: Id returned by ``schedule_once`` or ``schedule_repeating``.

        Returns:
            True if a timer was cancelled, False if it was unknown or already fired.
        """

    @abstractmethod
    def cancel_all(self) -> int:
        """Cancel every pending timer.

        Returns:
            Number of timers cancelled.
        """

    @property
    @abstractmethod
    def pending_count(self) -> int:
        """Get number of pending timers."""

    async def shutdown(self) -> None:
        """Cancel every pending timer."""
        self.cancel_all()


class AsyncioScheduler(Scheduler):
    """Scheduler backed by ``loop.call_later`` on the running event loop.

    Awaitables returned by callbacks are wrapped in tasks. Task failures are
    logged; they never stop a repeating timer.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Initialize the scheduler.

        Args:
            loop: Event loop to schedule on. Defaults to the running loop at
                the time of each call.
        """
        super().__init__()
        self._loop = loop
        self._handles: dict[int, asyncio.TimerHandle] = {}
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def pending_count(self) -> int:
        """Get number of pending timers."""
        return len(self._handles)

    @property
    def active_tasks(self) -> int:
        """Get number of callback tasks still running."""
        return len(self._tasks)

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def schedule_once(self, delay: float, callback: TimerCallback) -> int:
        """Call ``callback`` once after ``delay`` seconds."""
        self._validate_delay(delay, repeating=False)
        timer_id = self._next_id()

        def _fire() -> None:
            self._handles.pop(timer_id, None)
            self._run(callback)

        self._handles[timer_id] = self._get_loop().call_later(delay, _fire)
        return timer_id

    def schedule_repeating(self, interval: float, callback: TimerCallback) -> int:
        """Call ``callback`` every ``interval`` seconds until cancelled."""
        self._validate_delay(interval, repeating=True)
        timer_id = self._next_id()
        loop = self._get_loop()

        def _fire() -> None:
            # Re-arm before running so the callback may cancel its own timer
            self._handles[timer_id] = loop.call_later(interval, _fire)
            self._run(callback)

        self._handles[timer_id] = loop.call_later(interval, _fire)
        return timer_id

    def cancel(self, timer_id: int) -> bool:
        """Cancel a pending timer."""
        handle = self._handles.pop(timer_id, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def cancel_all(self) -> int:
        """Cancel every pending timer."""
        count = len(self._handles)
        for handle in self._handles.values():
            handle.cancel()
        self._handles.clear()
        return count

    async def shutdown(self) -> None:
        """Cancel all timers and any callback tasks still running."""
        self.cancel_all()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._tasks.clear()

    def _run(self, callback: TimerCallback) -> None:
        try:
            result = callback()
        except Exception:
            _LOGGER.exception("Scheduled callback %r failed", callback)
            return

        if not inspect.isawaitable(result):
            return

        task = asyncio.ensure_future(result)
        self._tasks.add(task)

        def _finalise(finished: asyncio.Task[Any]) -> None:
            self._tasks.discard(finished)
            if finished.cancelled():
                return
            exception = finished.exception()
            if exception is not None:
                _LOGGER.error("Scheduled task %r failed", finished, exc_info=exception)

        task.add_done_callback(_finalise)


@dataclass
class _ManualTimer:
    due: float
    interval: float | None
    callback: TimerCallback


class ManualScheduler(Scheduler):
    """Scheduler with a virtual clock, advanced explicitly.

    Timers fire in due-time order (ties in scheduling order) during
    ``advance``; awaitables returned by callbacks are awaited inline, so when
    ``advance`` returns every fired callback has completed. Exceptions raised
    by callbacks propagate out of ``advance``.

    Example:
        ```python
        scheduler = ManualScheduler()
        scheduler.schedule_once(0.3, send)
        await scheduler.advance(0.299)  # nothing yet
        await scheduler.advance(0.001)  # send() runs
        ```
    """

    def __init__(self, start: float = 0.0) -> None:
        """Initialize the virtual clock.

        Args:
            start: Initial virtual time in seconds.
        """
        super().__init__()
        self._now = start
        self._timers: dict[int, _ManualTimer] = {}

    @property
    def now(self) -> float:
        """Get the current virtual time in seconds."""
        return self._now

    @property
    def pending_count(self) -> int:
        """Get number of pending timers."""
        return len(self._timers)

    def schedule_once(self, delay: float, callback: TimerCallback) -> int:
        """Call ``callback`` once after ``delay`` virtual seconds."""
        self._validate_delay(delay, repeating=False)
        timer_id = self._next_id()
        self._timers[timer_id] = _ManualTimer(due=self._now + delay, interval=None, callback=callback)
        return timer_id

    def schedule_repeating(self, interval: float, callback: TimerCallback) -> int:
        """Call ``callback`` every ``interval`` virtual seconds until cancelled."""
        self._validate_delay(interval, repeating=True)
        timer_id = self._next_id()
        self._timers[timer_id] = _ManualTimer(due=self._now + interval, interval=interval, callback=callback)
        return timer_id

    def cancel(self, timer_id: int) -> bool:
        """Cancel a pending timer."""
        return self._timers.pop(timer_id, None) is not None

    def cancel_all(self) -> int:
        """Cancel every pending timer."""
        count = len(self._timers)
        self._timers.clear()
        return count

    async def advance(self, seconds: float) -> None:
        """Move the virtual clock forward, firing every timer that falls due.

        Args:
            seconds: Virtual seconds to advance.
        """
        if seconds < 0:
            msg = f"Cannot advance by a negative amount: {seconds}"
            raise ValueError(msg)

        target = self._now + seconds
        while True:
            due = [(timer.due, timer_id) for timer_id, timer in self._timers.items() if timer.due <= target]
            if not due:
                break

            due_time, timer_id = min(due)
            timer = self._timers[timer_id]
            self._now = due_time
            if timer.interval is None:
                del self._timers[timer_id]
            else:
                timer.due += timer.interval

            result = timer.callback()
            if inspect.isawaitable(result):
                await result

        self._now = target
