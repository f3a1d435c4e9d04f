"""``@`` mentions inside workout notes.

While a note is typed, :func:`detect_mention` decides whether the text ends
in an unfinished ``@name`` token and which exercises to offer for it, and
:func:`insert_mention` completes the token. When the workout is finished,
:func:`extract_exercise_notes` splits the note into fragments keyed by the
exercise each fragment mentions.

Names are compared case-insensitively after removing whitespace only, so
``@BenchPress`` matches "Bench Press" while ``@Push`` does not match
"Push-ups".
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from backend import MAX_MENTION_SUGGESTIONS, MENTION_MAX_LENGTH
from backend.exercise import Exercise

# ``@word`` followed by whitespace and the text up to the next ``@``
_MENTION_NOTE = re.compile(r"@(\w+)\s+([^@]*)")


@dataclass(frozen=True)
class MentionSuggestions:
    """An open mention and the exercises that could complete it."""

    start: int
    query: str
    candidates: tuple[Exercise, ...]


def detect_mention(
    text: str, exercises: Sequence[Exercise]
) -> MentionSuggestions | None:
    """Return suggestions for the mention being typed, or ``None``."""

    start = text.rfind("@")
    if start == -1:
        return None
    after = text[start + 1:]
    if " " in after or "\n" in after or len(after) > MENTION_MAX_LENGTH:
        return None
    query = after.lower()
    if query:
        matches = [ex for ex in exercises if query in ex.name.lower()]
    else:
        matches = list(exercises)
    return MentionSuggestions(
        start=start,
        query=query,
        candidates=tuple(matches[:MAX_MENTION_SUGGESTIONS]),
    )


def insert_mention(text: str, exercise_name: str) -> str:
    """Replace the open mention at the end of ``text`` with ``exercise_name``."""

    start = text.rfind("@")
    if start == -1:
        start = len(text)
    compact = re.sub(r"\s+", "", exercise_name)
    return f"{text[:start]}@{compact} "


def extract_exercise_notes(
    text: str, exercises: Iterable[Exercise]
) -> dict[str, str]:
    """Map exercise ids to the note fragment written after their mention.

    Mentions that do not name an exercise, and mentions with nothing written
    after them, are dropped. A later mention of the same exercise wins.
    """

    if not text or not text.strip():
        return {}
    by_name: dict[str, Exercise] = {}
    for ex in exercises:
        by_name.setdefault(ex.compact_name.lower(), ex)

    notes: dict[str, str] = {}
    for match in _MENTION_NOTE.finditer(text):
        exercise = by_name.get(match.group(1).lower())
        fragment = match.group(2).strip()
        if exercise and fragment:
            notes[exercise.id] = fragment
    return notes
