from pathlib import Path
import logging
import os
import sys

from kivymd.app import MDApp
from kivy.lang import Builder
from kivy.core.window import Window
from kivy.properties import BooleanProperty

from backend import settings
from backend.workout_session import WorkoutSession
from backend.workouts import SAMPLE_WORKOUT, load_workout
from ui.clock_scheduler import ClockScheduler
from ui.feedback import FeedbackSink

# Screens referenced from ``main.kv``
from ui.screens.session import ReflectionScreen, WorkoutModeScreen  # noqa: F401


if os.name == "nt" or sys.platform.startswith("win"):
    Window.size = (280, 280 * (20 / 9))


class WorkoutModeApp(MDApp):
    workout_session: WorkoutSession | None = None
    workout = None
    feedback: FeedbackSink | None = None
    # Data handed over by the most recently completed session
    last_completed: dict | None = None
    feedback_enabled = BooleanProperty(True)

    def build(self):
        self.history: list[dict] = []
        self._exercise_notes: dict = {}
        self.feedback_enabled = bool(settings.get_value("feedback_on"))
        return Builder.load_file(str(Path(__file__).with_name("main.kv")))

    def toggle_feedback(self, active: bool):
        """Turn sound cues on or off and remember the choice."""

        self.feedback_enabled = bool(active)
        settings.set_value("feedback_on", self.feedback_enabled)
        if self.feedback:
            self.feedback.enabled = self.feedback_enabled

    def start_workout(self, definition: dict | None = None):
        """Create a :class:`WorkoutSession` for ``definition`` and show it."""

        if self.workout_session:
            self.workout_session.close()
        self.workout = load_workout(definition or SAMPLE_WORKOUT)
        self.feedback = FeedbackSink(
            enabled=self.feedback_enabled,
            volume=float(settings.get_value("sound_level")),
        )
        self._exercise_notes = {}
        self.workout_session = WorkoutSession(
            self.workout.exercises,
            title=self.workout.title,
            scheduler=ClockScheduler(),
            feedback=self.feedback.signal,
            on_complete=self.complete_workout,
            on_exercise_notes=self.set_exercise_notes,
            navigate=self.navigate,
            completion_delay=float(settings.get_value("completion_delay")),
        )
        self.navigate("workout_mode")

    def set_exercise_notes(self, notes: dict):
        self._exercise_notes = dict(notes)

    def complete_workout(self, progress: dict):
        """Record the finished session handed off by the workout screen."""

        record = self.workout_session.completion_record()
        record["progress"] = progress
        record["exercise_notes"] = self._exercise_notes
        record["subtitle"] = self.workout.subtitle if self.workout else ""
        self.history.append(record)
        self.last_completed = record
        logging.info("Recorded workout '%s'", record["title"])

    def discard_workout(self):
        if self.workout_session:
            self.workout_session.close()
        self.workout_session = None
        self.navigate("start")

    def navigate(self, name: str):
        if self.root:
            self.root.current = name


if __name__ == "__main__":
    WorkoutModeApp().run()
