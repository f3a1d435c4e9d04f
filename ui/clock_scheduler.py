"""Run :class:`~backend.scheduler.ScheduledTask` callbacks on the Kivy clock."""

from typing import Callable

from kivy.clock import Clock

from backend.scheduler import ScheduledTask


class ClockScheduler:
    """Scheduler backed by :meth:`kivy.clock.Clock.schedule_once`.

    Cancelling the returned task also cancels the clock event so nothing
    fires after a session has been discarded.
    """

    def schedule(self, callback: Callable[[], None], delay: float) -> ScheduledTask:
        holder: dict = {}

        def _cancel_event():
            event = holder.get("event")
            if event is not None:
                event.cancel()

        task = ScheduledTask(callback, delay, on_cancel=_cancel_event)
        holder["event"] = Clock.schedule_once(lambda _dt: task.run(), delay)
        return task
