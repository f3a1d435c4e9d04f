from backend.scheduler import ManualScheduler, ScheduledTask


def test_task_runs_once():
    calls = []
    task = ScheduledTask(lambda: calls.append(1), 0.5)
    assert task.run() is True
    assert task.run() is False
    assert calls == [1]
    assert not task.pending


def test_cancelled_task_never_runs():
    calls = []
    cancelled = []
    task = ScheduledTask(lambda: calls.append(1), 0.5, on_cancel=lambda: cancelled.append(1))
    task.cancel()
    task.cancel()
    assert task.run() is False
    assert calls == []
    assert cancelled == [1]


def test_manual_scheduler_runs_due_tasks_in_order():
    scheduler = ManualScheduler()
    calls = []
    scheduler.schedule(lambda: calls.append("late"), 2.0)
    scheduler.schedule(lambda: calls.append("early"), 1.0)
    assert scheduler.advance(0.5) == 0
    assert scheduler.advance(0.5) == 1
    assert calls == ["early"]
    assert len(scheduler.pending) == 1
    assert scheduler.run_all() == 1
    assert calls == ["early", "late"]
    assert scheduler.pending == []


def test_manual_scheduler_skips_cancelled():
    scheduler = ManualScheduler()
    calls = []
    task = scheduler.schedule(lambda: calls.append(1), 1.0)
    task.cancel()
    assert scheduler.run_all() == 0
    assert calls == []
