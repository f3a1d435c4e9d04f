"""Cancellable delayed callbacks.

The workout session never waits on the wall clock itself. It asks a
scheduler for a :class:`ScheduledTask` and keeps the task so the callback
can be cancelled. :class:`ManualScheduler` advances time explicitly and is
used headless and in tests; the app uses :class:`ui.clock_scheduler.ClockScheduler`.
"""

from __future__ import annotations

from typing import Callable, Protocol


class ScheduledTask:
    """A callback that runs at most once unless cancelled first."""

    def __init__(
        self,
        callback: Callable[[], None],
        delay: float,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self.callback = callback
        self.delay = delay
        self.cancelled = False
        self.done = False
        self._on_cancel = on_cancel

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)

    def cancel(self) -> None:
        if not self.pending:
            return
        self.cancelled = True
        if self._on_cancel:
            self._on_cancel()

    def run(self) -> bool:
        """Invoke the callback. Returns ``False`` if it was cancelled or ran."""

        if not self.pending:
            return False
        self.done = True
        self.callback()
        return True


class Scheduler(Protocol):
    def schedule(self, callback: Callable[[], None], delay: float) -> ScheduledTask:
        ...


class ManualScheduler:
    """Scheduler whose clock only moves when :meth:`advance` is called."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, ScheduledTask]] = []
        self._counter = 0

    def schedule(self, callback: Callable[[], None], delay: float) -> ScheduledTask:
        task = ScheduledTask(callback, delay)
        self._queue.append((self.now + max(0.0, delay), self._counter, task))
        self._counter += 1
        return task

    @property
    def pending(self) -> list[ScheduledTask]:
        return [task for _due, _order, task in sorted(self._queue) if task.pending]

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every task that became due.

        Returns the number of callbacks that ran.
        """

        self.now += seconds
        ran = 0
        while True:
            due = [item for item in self._queue if item[0] <= self.now]
            if not due:
                return ran
            item = min(due)
            self._queue.remove(item)
            if item[2].run():
                ran += 1

    def run_all(self) -> int:
        """Run everything still queued regardless of its due time."""

        if not self._queue:
            return 0
        latest = max(due for due, _order, _task in self._queue)
        return self.advance(max(0.0, latest - self.now))
