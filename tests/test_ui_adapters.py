"""Tests for the Kivy-backed scheduler and feedback sink using stubbed Kivy."""

import sys
import types
from importlib import util
from pathlib import Path

from backend.workout_session import EXERCISE_COMPLETED, SESSION_COMPLETED, SET_COMPLETED

ROOT = Path(__file__).resolve().parents[1]


def _load(module_name: str, relative: str, stubs: dict):
    saved = {name: sys.modules.get(name) for name in stubs}
    sys.modules.update(stubs)
    try:
        spec = util.spec_from_file_location(module_name, ROOT / relative)
        module = util.module_from_spec(spec)
        spec.loader.exec_module(module)
    finally:
        # Clean up stubs so other tests remain unaffected.
        for name, original in saved.items():
            if original is None:
                sys.modules.pop(name, None)
            else:
                sys.modules[name] = original
    return module


class FakeClock:
    def __init__(self):
        self.events = []

    def schedule_once(self, func, timeout=0):
        event = types.SimpleNamespace(func=func, timeout=timeout, cancelled=False)
        event.cancel = lambda: setattr(event, "cancelled", True)
        self.events.append(event)
        return event

    def tick(self):
        for event in list(self.events):
            if not event.cancelled:
                event.func(event.timeout)
        self.events.clear()


def _clock_scheduler(clock):
    kivy = types.ModuleType("kivy")
    kivy_clock = types.ModuleType("kivy.clock")
    kivy_clock.Clock = clock
    module = _load(
        "clock_scheduler", "ui/clock_scheduler.py", {"kivy": kivy, "kivy.clock": kivy_clock}
    )
    return module.ClockScheduler()


def test_clock_scheduler_runs_task():
    clock = FakeClock()
    scheduler = _clock_scheduler(clock)
    calls = []
    task = scheduler.schedule(lambda: calls.append(1), 0.9)
    assert clock.events[0].timeout == 0.9
    clock.tick()
    assert calls == [1]
    assert task.done


def test_clock_scheduler_cancel_cancels_event():
    clock = FakeClock()
    scheduler = _clock_scheduler(clock)
    calls = []
    task = scheduler.schedule(lambda: calls.append(1), 0.9)
    task.cancel()
    assert clock.events[0].cancelled
    clock.tick()
    assert calls == []


def test_session_handoff_through_clock(push_day):
    from backend.workout_session import WorkoutSession

    clock = FakeClock()
    completed = []
    session = WorkoutSession(
        push_day, scheduler=_clock_scheduler(clock), on_complete=completed.append
    )
    for ex in session.exercises:
        session.toggle_all_sets(ex.id)
    assert completed == []
    clock.tick()
    assert len(completed) == 1


class FakeSound:
    def __init__(self, name):
        self.name = name
        self.volume = 1.0
        self.plays = 0

    def stop(self):
        pass

    def play(self):
        self.plays += 1


def _feedback_module(loaded):
    kivy = types.ModuleType("kivy")
    kivy_core = types.ModuleType("kivy.core")
    kivy_audio = types.ModuleType("kivy.core.audio")

    def load(path):
        name = Path(path).stem
        if name == "end":
            return None
        loaded.append(name)
        return FakeSound(name)

    kivy_audio.SoundLoader = types.SimpleNamespace(load=load)
    return _load(
        "feedback",
        "ui/feedback.py",
        {"kivy": kivy, "kivy.core": kivy_core, "kivy.core.audio": kivy_audio},
    )


def test_feedback_plays_mapped_sounds():
    loaded = []
    module = _feedback_module(loaded)
    sink = module.FeedbackSink(volume=0.5)
    sink.signal(SET_COMPLETED)
    sink.signal(SET_COMPLETED)
    sink.signal(EXERCISE_COMPLETED)
    sink.signal(SESSION_COMPLETED)  # missing sound file
    sink.signal("unknown")
    assert loaded == ["tick", "release"]
    assert sink._cache["tick"].plays == 2
    assert sink._cache["tick"].volume == 0.5
    assert sink._cache["end"] is None


def test_feedback_disabled_is_silent():
    loaded = []
    module = _feedback_module(loaded)
    sink = module.FeedbackSink(enabled=False)
    sink.signal(SET_COMPLETED)
    assert loaded == []
