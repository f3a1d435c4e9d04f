from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Mapping

from backend import CATEGORY_ORDER, DEFAULT_CATEGORY, MAX_SET_CIRCLES


class InvalidArgumentError(ValueError):
    """Raised when a caller passes an index, id or category that cannot exist."""


# Prescriptions containing one of these are timed or distance based and
# are tracked as a single set.
_UNIT_TOKENS = ("min", "km", "sec")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def derive_set_count(info: str | None) -> int:
    """Return how many toggleable sets an exercise prescription yields.

    ``"3x12"`` gives 3, ``"20 min"`` gives 1 and anything unparsable falls
    back to 1. The result is capped at :data:`MAX_SET_CIRCLES`, so a
    ``"6x8"`` exercise is complete after four taps.
    """

    if not info:
        return 1
    lowered = info.lower()
    if any(token in lowered for token in _UNIT_TOKENS):
        return 1
    match = _LEADING_INT.match(lowered.split("x")[0])
    if not match:
        return 1
    count = int(match.group(1))
    if count < 1:
        return 1
    return min(count, MAX_SET_CIRCLES)


def validate_category(category: str) -> str:
    """Return ``category`` if it is one of :data:`CATEGORY_ORDER`."""

    if category not in CATEGORY_ORDER:
        raise InvalidArgumentError(f"Unknown category '{category}'")
    return category


@dataclass(frozen=True)
class Exercise:
    """A single prescribed exercise within a workout.

    ``info`` is the free-text prescription shown under the name (``"3x12"``,
    ``"5 min"``). ``original_id`` is only set on exercises that replaced
    another one through a swap, and then equals ``id``.
    """

    id: str
    name: str
    info: str = ""
    category: str = DEFAULT_CATEGORY
    original_id: str | None = None

    def __post_init__(self) -> None:
        validate_category(self.category)

    @property
    def set_count(self) -> int:
        return derive_set_count(self.info)

    @property
    def compact_name(self) -> str:
        """Name with all whitespace removed, as used in ``@`` mentions."""

        return re.sub(r"\s+", "", self.name)

    def in_slot(self, slot_id: str) -> "Exercise":
        """Return a copy that occupies ``slot_id`` as a swapped-in exercise."""

        return replace(self, id=slot_id, original_id=slot_id)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Exercise":
        """Build an exercise from a plain mapping such as a JSON object."""

        if "id" not in data or "name" not in data:
            raise InvalidArgumentError("Exercise definitions need an 'id' and a 'name'")
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            info=str(data.get("info") or ""),
            category=data.get("category") or DEFAULT_CATEGORY,
            original_id=data.get("originalId", data.get("original_id")),
        )

    def to_dict(self) -> dict:
        """Return a ``dict`` representation of the exercise."""

        data = {
            "id": self.id,
            "name": self.name,
            "info": self.info,
            "category": self.category,
        }
        if self.original_id is not None:
            data["original_id"] = self.original_id
        return data
