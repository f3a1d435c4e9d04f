from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from backend.exercise import Exercise
from backend.scheduler import ManualScheduler
from backend.workout_session import WorkoutSession


class Recorder:
    """Collects the calls a session makes to its collaborators."""

    def __init__(self):
        self.signals: list[str] = []
        self.completed: list[dict] = []
        self.exercise_notes: list[dict] = []
        self.screens: list[str] = []


@pytest.fixture
def push_day() -> list[Exercise]:
    """Warm-up with two exercises, three main lifts and one cool-down."""
    return [
        Exercise("cardio", "Light Cardio", "5 min", "warmup"),
        Exercise("circles", "Arm Circles", "2x20", "warmup"),
        Exercise("bench", "Bench Press", "4x8 @ 70 kg", "main"),
        Exercise("ohp", "Overhead Press", "3x10", "main"),
        Exercise("dips", "Triceps Dips", "6x12", "main"),
        Exercise("stretch", "Static Stretches", "5 min", "cooldown"),
    ]


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_session(scheduler, recorder):
    """Return a factory building sessions wired to ``recorder``."""

    def _make(exercises, **kwargs):
        kwargs.setdefault("title", "Push Day")
        return WorkoutSession(
            exercises,
            scheduler=scheduler,
            feedback=recorder.signals.append,
            on_complete=recorder.completed.append,
            on_exercise_notes=recorder.exercise_notes.append,
            navigate=recorder.screens.append,
            **kwargs,
        )

    return _make


@pytest.fixture
def session(make_session, push_day) -> WorkoutSession:
    return make_session(push_day)


def complete_exercise(session: WorkoutSession, exercise_id: str) -> None:
    """Check every remaining set of ``exercise_id`` one at a time."""
    for index, done in enumerate(session.sets_for(exercise_id)):
        if not done:
            session.toggle_set(exercise_id, index)
