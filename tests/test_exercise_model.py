import pytest

from backend.exercise import Exercise, InvalidArgumentError, derive_set_count


@pytest.mark.parametrize(
    "info, expected",
    [
        ("3x12", 3),
        ("6x8", 4),
        ("5x10", 4),
        ("4x8 @ 70 kg", 4),
        ("2X15", 2),
        ("abc", 1),
        ("", 1),
        (None, 1),
        ("20 min", 1),
        ("5 KM easy", 1),
        ("3x45 sec", 1),
        ("0x10", 1),
        ("-2x5", 1),
        ("3 × 12", 3),
        ("12", 4),
    ],
)
def test_derive_set_count(info, expected):
    assert derive_set_count(info) == expected


def test_set_count_always_between_one_and_four():
    for info in ["1x1", "2x2", "9x9", "100x1", "x", "x10", "min", "  7x3"]:
        assert 1 <= derive_set_count(info) <= 4


def test_from_dict_defaults_category_to_main():
    ex = Exercise.from_dict({"id": 7, "name": "Plank", "info": "3x45 sec"})
    assert ex.id == "7"
    assert ex.category == "main"
    assert ex.set_count == 1


def test_unknown_category_rejected():
    with pytest.raises(InvalidArgumentError):
        Exercise("x", "Mystery", "3x10", "stretching")


def test_from_dict_requires_id_and_name():
    with pytest.raises(InvalidArgumentError):
        Exercise.from_dict({"name": "No id"})


def test_in_slot_keeps_slot_id():
    alt = Exercise("alt-main-1", "Push-ups", "3 × 12", "main")
    swapped = alt.in_slot("bench")
    assert swapped.id == "bench"
    assert swapped.original_id == "bench"
    assert swapped.name == "Push-ups"
    assert swapped.to_dict()["original_id"] == "bench"


def test_compact_name_strips_whitespace():
    assert Exercise("b", "Bench  Press\tWide").compact_name == "BenchPressWide"
