"""Shared constants and globals for backend modules."""

from __future__ import annotations

# Categories in the order they are displayed and worked through
CATEGORY_ORDER = ("warmup", "main", "cooldown")

# Category used when a workout definition leaves it out
DEFAULT_CATEGORY = "main"

CATEGORY_LABELS = {
    "warmup": "Warm-up",
    "main": "Workout",
    "cooldown": "Cool-down",
}

# Exercises never render more than this many set circles
MAX_SET_CIRCLES = 4

# Seconds between reaching 100% and handing the session off
COMPLETION_DELAY = 0.9

# Text after the last ``@`` longer than this is not treated as a mention
MENTION_MAX_LENGTH = 20

# Number of exercises offered while completing a mention
MAX_MENTION_SUGGESTIONS = 4

__all__ = [
    "CATEGORY_ORDER",
    "DEFAULT_CATEGORY",
    "CATEGORY_LABELS",
    "MAX_SET_CIRCLES",
    "COMPLETION_DELAY",
    "MENTION_MAX_LENGTH",
    "MAX_MENTION_SUGGESTIONS",
]
