"""UI screen modules for workout mode."""

from .session import ReflectionScreen, WorkoutModeScreen

__all__ = [
    "ReflectionScreen",
    "WorkoutModeScreen",
]
