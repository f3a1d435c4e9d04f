import logging
from typing import Any, Callable, Iterable, Mapping

from backend import CATEGORY_LABELS, CATEGORY_ORDER, COMPLETION_DELAY
from backend.exercise import Exercise
from backend.mentions import (
    MentionSuggestions,
    detect_mention,
    extract_exercise_notes,
    insert_mention,
)
from backend.scheduler import ManualScheduler, ScheduledTask, Scheduler
from backend import session_state
from backend.session_state import ExerciseNotFoundError, SessionState

# Signals sent to the feedback sink. They carry no payload.
SET_COMPLETED = "set_completed"
EXERCISE_COMPLETED = "exercise_completed"
SESSION_COMPLETED = "session_completed"

# Screen requested once the session has been handed off
REFLECTION_SCREEN = "reflection"


class WorkoutSession:
    """Live progress of a workout being performed.

    The session wraps an immutable :class:`~backend.session_state.SessionState`
    and is the only place that replaces it. After every mutation it

    * forwards completion events to the ``feedback`` sink,
    * collapses categories that were just finished and opens the next one,
      unless the user has toggled either category themselves, and
    * checks whether every set is done.

    The first time every set is done a one-shot latch fires: progress is
    snapshotted, ``SESSION_COMPLETED`` is signalled and a hand-off is
    scheduled ``completion_delay`` seconds later. The hand-off delivers the
    snapshot (not the live progress) to ``on_complete`` and asks
    ``navigate`` for the reflection screen. Unchecking sets afterwards does
    not re-arm the latch.
    """

    def __init__(
        self,
        exercises: Iterable[Exercise | Mapping[str, Any]],
        *,
        title: str = "",
        scheduler: Scheduler | None = None,
        feedback: Callable[[str], None] | None = None,
        on_complete: Callable[[dict], None] | None = None,
        on_exercise_notes: Callable[[dict], None] | None = None,
        navigate: Callable[[str], None] | None = None,
        completion_delay: float = COMPLETION_DELAY,
    ):
        self.title = title
        self._state = session_state.create_session_state(exercises)
        self.scheduler = scheduler or ManualScheduler()
        self.feedback = feedback
        self.on_complete = on_complete
        self.on_exercise_notes = on_exercise_notes
        self.navigate = navigate
        self.completion_delay = completion_delay

        # suggestions for the mention currently being typed in the notes
        self.mention: MentionSuggestions | None = None
        # one-shot completion latch and the data captured when it fired
        self.completion_fired: bool = False
        self.completion_snapshot: dict[str, tuple[bool, ...]] | None = None
        self.notes_snapshot: str = ""
        self.exercises_snapshot: tuple[Exercise, ...] = ()
        self.handoff_task: ScheduledTask | None = None
        self.handed_off: bool = False
        self.closed: bool = False
        self._listeners: list[Callable[["WorkoutSession"], None]] = []

        logging.info(
            "Workout session '%s' started with %d exercises and %d sets",
            title,
            len(self._state.exercises),
            self.total_sets,
        )

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------
    def add_listener(self, callback: Callable[["WorkoutSession"], None]) -> None:
        """Call ``callback`` with this session after progress or layout changes."""

        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[["WorkoutSession"], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback(self)

    def _signal(self, kind: str) -> None:
        if not self.feedback:
            return
        try:
            self.feedback(kind)
        except Exception:
            logging.exception("Feedback signal '%s' failed", kind)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def exercises(self) -> tuple[Exercise, ...]:
        """Exercises in workout order with swaps applied."""
        return self._state.current_exercises

    @property
    def categories(self) -> tuple[str, ...]:
        return self._state.categories

    @property
    def notes(self) -> str:
        return self._state.notes

    def exercises_in(self, category: str) -> tuple[Exercise, ...]:
        return self._state.exercises_in(category)

    @property
    def total_sets(self) -> int:
        return sum(len(sets) for sets in self._state.progress.values())

    @property
    def completed_sets_count(self) -> int:
        return sum(sum(sets) for sets in self._state.progress.values())

    @property
    def progress_percent(self) -> int:
        total = self.total_sets
        if not total:
            return 0
        # halves round up
        return int(100 * self.completed_sets_count / total + 0.5)

    @property
    def all_complete(self) -> bool:
        total = self.total_sets
        return total > 0 and self.completed_sets_count == total

    def category_done(self, category: str) -> bool:
        return self._state.is_category_done(category)

    def category_completed_count(self, category: str) -> int:
        return sum(
            1 for ex in self.exercises_in(category) if self._state.is_exercise_done(ex.id)
        )

    def is_collapsed(self, category: str) -> bool:
        return self._state.collapsed.get(category, True)

    @property
    def next_exercise_id(self) -> str | None:
        """Id of the first exercise with an unchecked set, or ``None``."""
        for category in CATEGORY_ORDER:
            for ex in self.exercises_in(category):
                if not self._state.is_exercise_done(ex.id):
                    return ex.id
        return None

    def sets_for(self, exercise_id: str) -> tuple[bool, ...]:
        return self._state.sets_for(exercise_id)

    def completed_count(self, exercise_id: str) -> int:
        return sum(self.sets_for(exercise_id))

    def next_set_index(self, exercise_id: str) -> int | None:
        """Index of the highlighted set circle of the next exercise."""

        if exercise_id != self.next_exercise_id:
            return None
        return self.completed_count(exercise_id)

    def progress_label(self, exercise_id: str) -> str:
        """Return e.g. ``"2/3 sets"``; empty when done or single-set."""

        sets = self.sets_for(exercise_id)
        if all(sets) or len(sets) <= 1:
            return ""
        return f"{sum(sets)}/{len(sets)} sets"

    @property
    def can_finish(self) -> bool:
        return not self.completion_fired and self.completed_sets_count > 0

    @property
    def needs_exit_confirmation(self) -> bool:
        """Leaving now would throw away checked sets."""
        return self.completed_sets_count > 0

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def _commit(self, state: SessionState, events=()) -> None:
        previous = self._state
        self._state = state
        for _event in events:
            self._signal(EXERCISE_COMPLETED)
        self._auto_advance(previous)
        self._check_completion()
        self._notify()

    def toggle_set(self, exercise_id: str, set_index: int) -> None:
        """Check or uncheck a single set."""

        state, events = session_state.toggle_set(self._state, exercise_id, set_index)
        if state.progress[exercise_id][set_index]:
            self._signal(SET_COMPLETED)
        self._commit(state, events)

    def toggle_all_sets(self, exercise_id: str) -> None:
        """Check every set of an exercise, or clear them if all are checked."""

        state, events = session_state.toggle_all_sets(self._state, exercise_id)
        self._commit(state, events)

    def swap_exercise(
        self, original_exercise_id: str, new_exercise: Exercise | Mapping[str, Any]
    ) -> bool:
        """Replace an exercise and reset its sets.

        Returns ``False`` without changing anything if
        ``original_exercise_id`` is not part of this session.
        """

        try:
            state = session_state.swap_exercise(
                self._state, original_exercise_id, new_exercise
            )
        except ExerciseNotFoundError:
            logging.warning("Swap ignored: no exercise '%s' in session", original_exercise_id)
            return False
        replacement = state.swaps[original_exercise_id]
        logging.info(
            "Swapped exercise '%s' for '%s' (%d sets)",
            original_exercise_id,
            replacement.name,
            replacement.set_count,
        )
        self._commit(state)
        return True

    def set_collapsed(self, category: str, collapsed: bool, user_initiated: bool = False) -> None:
        self._state = session_state.set_collapsed(
            self._state, category, collapsed, user_initiated
        )
        self._notify()

    def toggle_collapsed(self, category: str) -> None:
        """Expand or collapse ``category`` on behalf of the user."""

        self.set_collapsed(category, not self.is_collapsed(category), user_initiated=True)

    def update_notes(self, text: str) -> MentionSuggestions | None:
        """Replace the note text and refresh mention suggestions.

        Listeners are not called: notes change on every keystroke and leave
        the progress untouched, so callers show the returned suggestions
        themselves.
        """

        self._state = session_state.set_notes(self._state, text)
        self.mention = detect_mention(text, self.exercises)
        return self.mention

    def select_mention(self, exercise_name: str) -> str:
        """Complete the open mention with ``exercise_name``."""

        if self.mention is not None:
            text = insert_mention(self.notes, exercise_name)
            self._state = session_state.set_notes(self._state, text)
            self.mention = None
        return self.notes

    # ------------------------------------------------------------------
    # Auto-advance and completion
    # ------------------------------------------------------------------
    def _auto_advance(self, previous: SessionState) -> None:
        state = self._state
        order = state.categories
        for index, category in enumerate(order):
            if category in state.user_touched:
                continue
            if not state.is_category_done(category) or previous.is_category_done(category):
                continue
            if state.collapsed.get(category, True):
                continue
            logging.debug("Category '%s' finished, collapsing", category)
            state = session_state.set_collapsed(state, category, True)
            if index + 1 < len(order):
                following = order[index + 1]
                if following not in state.user_touched:
                    logging.debug("Expanding category '%s'", following)
                    state = session_state.set_collapsed(state, following, False)
        self._state = state

    def _latch_completion(self) -> None:
        self.completion_fired = True
        self.completion_snapshot = self._state.progress_snapshot()
        self.notes_snapshot = self._state.notes
        self.exercises_snapshot = self._state.current_exercises
        self._signal(SESSION_COMPLETED)

    def _check_completion(self) -> None:
        if self.completion_fired or self.closed or not self.all_complete:
            return
        self._latch_completion()
        logging.info(
            "Workout '%s' complete, handing off in %.2fs", self.title, self.completion_delay
        )
        self.handoff_task = self.scheduler.schedule(self._hand_off, self.completion_delay)

    def _hand_off(self) -> None:
        if self.handed_off:
            return
        self.handed_off = True
        exercise_notes = extract_exercise_notes(
            self.notes_snapshot, self.exercises_snapshot
        )
        if exercise_notes and self.on_exercise_notes:
            self.on_exercise_notes(exercise_notes)
        logging.info(
            "Handing off workout '%s' with %d exercise notes",
            self.title,
            len(exercise_notes),
        )
        if self.on_complete:
            self.on_complete(dict(self.completion_snapshot or {}))
        if self.navigate:
            self.navigate(REFLECTION_SCREEN)

    def finish(self) -> bool:
        """Finish early on the user's request.

        Requires at least one checked set. Returns ``False`` when the request
        is rejected or the session has already been completed.
        """

        if self.completion_fired or self.closed:
            return False
        if self.completed_sets_count == 0:
            logging.info("Finish ignored: no sets completed")
            return False
        self._latch_completion()
        logging.info(
            "Workout '%s' finished early at %d%%", self.title, self.progress_percent
        )
        self._hand_off()
        self._notify()
        return True

    def close(self) -> None:
        """Discard the session, cancelling a hand-off that has not run yet."""

        self.closed = True
        if self.handoff_task is not None and self.handoff_task.pending:
            self.handoff_task.cancel()
            logging.info("Pending hand-off for '%s' cancelled", self.title)
        self._listeners.clear()

    def completion_record(self) -> dict | None:
        """Return what the session looked like when it was completed.

        Every field comes from the data captured by the completion latch, so
        edits made while the hand-off is pending do not leak into the
        record. ``None`` until the session has been completed or finished.
        """

        if not self.completion_fired:
            return None
        return {
            "title": self.title,
            "exercises": self.exercises_snapshot,
            "progress": dict(self.completion_snapshot or {}),
            "notes": self.notes_snapshot,
            "exercise_notes": extract_exercise_notes(
                self.notes_snapshot, self.exercises_snapshot
            ),
        }

    # ------------------------------------------------------------------
    def summary(self) -> str:
        """Return a plain-text overview of the session."""

        lines = [
            self.title or "Workout",
            f"{self.completed_sets_count}/{self.total_sets} sets ({self.progress_percent}%)",
        ]
        for category in self.categories:
            members = self.exercises_in(category)
            lines.append(
                f"{CATEGORY_LABELS[category]} · "
                f"{self.category_completed_count(category)}/{len(members)}"
            )
            for ex in members:
                sets = self.sets_for(ex.id)
                lines.append(f"  {ex.name} ({ex.info}): {sum(sets)}/{len(sets)} sets")
        return "\n".join(lines)
