"""Replacement exercises offered when swapping mid-session.

The lists are pre-authored per category. The session's swap operation does
not care where a replacement comes from; this catalog only feeds the swap
dialog.
"""

from __future__ import annotations

from backend import DEFAULT_CATEGORY
from backend.exercise import Exercise

EXERCISE_ALTERNATIVES: dict[str, tuple[Exercise, ...]] = {
    "warmup": (
        Exercise("alt-warmup-1", "Jumping Jacks", "2 min", "warmup"),
        Exercise("alt-warmup-2", "High Knees", "1 min", "warmup"),
        Exercise("alt-warmup-3", "Arm Circles", "1 min", "warmup"),
        Exercise("alt-warmup-4", "Leg Swings", "1 min each leg", "warmup"),
        Exercise("alt-warmup-5", "Hip Circles", "1 min", "warmup"),
    ),
    "main": (
        Exercise("alt-main-1", "Push-ups", "3 × 12", "main"),
        Exercise("alt-main-2", "Dumbbell Rows", "3 × 10", "main"),
        Exercise("alt-main-3", "Goblet Squats", "3 × 12", "main"),
        Exercise("alt-main-4", "Lunges", "3 × 10 each", "main"),
        Exercise("alt-main-5", "Plank", "3 × 30 sec", "main"),
        Exercise("alt-main-6", "Dumbbell Press", "3 × 10", "main"),
        Exercise("alt-main-7", "Lat Pulldown", "3 × 12", "main"),
        Exercise("alt-main-8", "Leg Press", "3 × 12", "main"),
    ),
    "cooldown": (
        Exercise("alt-cool-1", "Static Stretches", "5 min", "cooldown"),
        Exercise("alt-cool-2", "Foam Rolling", "5 min", "cooldown"),
        Exercise("alt-cool-3", "Deep Breathing", "2 min", "cooldown"),
        Exercise("alt-cool-4", "Light Walking", "3 min", "cooldown"),
    ),
}


def get_alternatives(exercise: Exercise) -> list[Exercise]:
    """Return candidate replacements for ``exercise``.

    Candidates come from the exercise's category and never include an
    alternative with the same id as ``exercise``.
    """

    options = EXERCISE_ALTERNATIVES.get(
        exercise.category, EXERCISE_ALTERNATIVES[DEFAULT_CATEGORY]
    )
    return [alt for alt in options if alt.id != exercise.id]
