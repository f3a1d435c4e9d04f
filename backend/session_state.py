"""State of a workout that is in progress.

:class:`SessionState` is an immutable value. Every operation in this module
takes a state and returns a new one, so the orchestrator in
:mod:`backend.workout_session` can compare the state before and after a
mutation and nothing else can change a session behind its back.

Progress is keyed by the *slot* id of an exercise. Swapping an exercise
keeps the slot id, which is why a replacement is stored in ``swaps`` under
the id of the exercise it replaced.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping

from backend import CATEGORY_ORDER
from backend.exercise import Exercise, InvalidArgumentError, validate_category


class ExerciseNotFoundError(KeyError):
    """Raised when a swap targets an id that is not part of the session."""


@dataclass(frozen=True)
class SetsCompleted:
    """Emitted when every set of ``exercise_id`` has just been checked."""

    exercise_id: str


@dataclass(frozen=True)
class SessionState:
    exercises: tuple[Exercise, ...]
    progress: Mapping[str, tuple[bool, ...]]
    collapsed: Mapping[str, bool]
    swaps: Mapping[str, Exercise] = field(default_factory=dict)
    user_touched: frozenset[str] = frozenset()
    notes: str = ""

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------
    @property
    def current_exercises(self) -> tuple[Exercise, ...]:
        """Exercises in workout order with swaps applied."""

        return tuple(self.swaps.get(ex.id, ex) for ex in self.exercises)

    @property
    def categories(self) -> tuple[str, ...]:
        """Non-empty categories in display order."""

        present = {ex.category for ex in self.current_exercises}
        return tuple(cat for cat in CATEGORY_ORDER if cat in present)

    def exercises_in(self, category: str) -> tuple[Exercise, ...]:
        return tuple(ex for ex in self.current_exercises if ex.category == category)

    def exercise(self, exercise_id: str) -> Exercise:
        for ex in self.current_exercises:
            if ex.id == exercise_id:
                return ex
        raise InvalidArgumentError(f"Unknown exercise id '{exercise_id}'")

    def sets_for(self, exercise_id: str) -> tuple[bool, ...]:
        if exercise_id not in self.progress:
            raise InvalidArgumentError(f"Unknown exercise id '{exercise_id}'")
        return self.progress[exercise_id]

    def is_exercise_done(self, exercise_id: str) -> bool:
        return all(self.sets_for(exercise_id))

    def is_category_done(self, category: str) -> bool:
        """Return ``True`` if ``category`` has exercises and all are done."""

        members = self.exercises_in(category)
        return bool(members) and all(self.is_exercise_done(ex.id) for ex in members)

    def progress_snapshot(self) -> dict[str, tuple[bool, ...]]:
        """Return a detached copy of the progress map."""

        return {key: tuple(value) for key, value in self.progress.items()}


# ----------------------------------------------------------------------
# Construction
# ----------------------------------------------------------------------
def _as_exercise(definition: Exercise | Mapping[str, Any]) -> Exercise:
    if isinstance(definition, Exercise):
        return definition
    return Exercise.from_dict(definition)


def create_session_state(
    exercises: Iterable[Exercise | Mapping[str, Any]],
) -> SessionState:
    """Seed a new session from a workout's exercise list.

    The first non-empty category starts expanded and the rest collapsed.
    """

    seeded = tuple(_as_exercise(ex) for ex in exercises)
    seen: set[str] = set()
    for ex in seeded:
        if ex.id in seen:
            raise InvalidArgumentError(f"Duplicate exercise id '{ex.id}'")
        seen.add(ex.id)

    progress = {ex.id: (False,) * ex.set_count for ex in seeded}
    present = [cat for cat in CATEGORY_ORDER if any(ex.category == cat for ex in seeded)]
    first = present[0] if present else None
    collapsed = {cat: cat != first for cat in CATEGORY_ORDER}
    return SessionState(exercises=seeded, progress=progress, collapsed=collapsed)


# ----------------------------------------------------------------------
# Transitions
# ----------------------------------------------------------------------
def _with_sets(
    state: SessionState, exercise_id: str, sets: tuple[bool, ...]
) -> tuple[SessionState, list[SetsCompleted]]:
    was_done = all(state.progress[exercise_id])
    progress = dict(state.progress)
    progress[exercise_id] = sets
    events = [SetsCompleted(exercise_id)] if all(sets) and not was_done else []
    return replace(state, progress=progress), events


def toggle_set(
    state: SessionState, exercise_id: str, set_index: int
) -> tuple[SessionState, list[SetsCompleted]]:
    """Flip one set of ``exercise_id``."""

    sets = state.sets_for(exercise_id)
    if (
        not isinstance(set_index, int)
        or isinstance(set_index, bool)
        or not 0 <= set_index < len(sets)
    ):
        raise InvalidArgumentError(
            f"Set index {set_index} out of range for '{exercise_id}' ({len(sets)} sets)"
        )
    updated = list(sets)
    updated[set_index] = not updated[set_index]
    return _with_sets(state, exercise_id, tuple(updated))


def toggle_all_sets(
    state: SessionState, exercise_id: str
) -> tuple[SessionState, list[SetsCompleted]]:
    """Check every set, or clear them all if they are already checked."""

    sets = state.sets_for(exercise_id)
    target = not all(sets)
    return _with_sets(state, exercise_id, (target,) * len(sets))


def swap_exercise(
    state: SessionState,
    original_exercise_id: str,
    new_exercise: Exercise | Mapping[str, Any],
) -> SessionState:
    """Replace the exercise in slot ``original_exercise_id``.

    The slot keeps its id; its sets are re-derived from the replacement's
    prescription and reset to unchecked.
    """

    if original_exercise_id not in state.progress:
        raise ExerciseNotFoundError(original_exercise_id)
    replacement = _as_exercise(new_exercise).in_slot(original_exercise_id)
    swaps = dict(state.swaps)
    swaps[original_exercise_id] = replacement
    progress = dict(state.progress)
    progress[original_exercise_id] = (False,) * replacement.set_count
    return replace(state, swaps=swaps, progress=progress)


def set_collapsed(
    state: SessionState,
    category: str,
    collapsed: bool,
    user_initiated: bool = False,
) -> SessionState:
    """Set the visibility flag of ``category``.

    A user-initiated change also opts the category out of automatic
    collapsing and expanding for the rest of the session.
    """

    validate_category(category)
    flags = dict(state.collapsed)
    flags[category] = bool(collapsed)
    touched = state.user_touched | {category} if user_initiated else state.user_touched
    return replace(state, collapsed=flags, user_touched=touched)


def set_notes(state: SessionState, text: str) -> SessionState:
    return replace(state, notes=text)
