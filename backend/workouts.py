"""Workout definitions that seed a session.

Workouts arrive as plain mappings (for example decoded JSON) with a
``title`` and an ordered ``exercises`` list. The session treats the result
as a snapshot and never writes back to it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from backend.exercise import Exercise


@dataclass(frozen=True)
class Workout:
    title: str
    exercises: tuple[Exercise, ...]
    subtitle: str = ""


def load_workout(data: Mapping[str, Any]) -> Workout:
    """Build a :class:`Workout` from ``data``."""

    return Workout(
        title=str(data.get("title", "")),
        subtitle=str(data.get("subtitle", "")),
        exercises=tuple(Exercise.from_dict(ex) for ex in data.get("exercises", [])),
    )


SAMPLE_WORKOUT: dict = {
    "title": "Push Day",
    "subtitle": "Chest, Shoulders & Triceps",
    "exercises": [
        {"id": "light-cardio", "name": "Light Cardio", "info": "5 min", "category": "warmup"},
        {"id": "arm-circles", "name": "Arm Circles", "info": "2x20", "category": "warmup"},
        {"id": "bench-press", "name": "Bench Press", "info": "4x8 @ 70 kg", "category": "main"},
        {"id": "overhead-press", "name": "Overhead Press", "info": "3x10 @ 30 kg", "category": "main"},
        {"id": "dips", "name": "Triceps Dips", "info": "3x12", "category": "main"},
        {"id": "lateral-raise", "name": "Lateral Raises", "info": "3x15 @ 8 kg", "category": "main"},
        {"id": "static-stretch", "name": "Static Stretches", "info": "5 min", "category": "cooldown"},
    ],
}
