"""Screens used during an active workout session."""

from .reflection_screen import ReflectionScreen
from .workout_mode_screen import WorkoutModeScreen

__all__ = [
    "ReflectionScreen",
    "WorkoutModeScreen",
]
