from backend.alternatives import EXERCISE_ALTERNATIVES, get_alternatives
from backend.exercise import Exercise


def test_alternatives_follow_category():
    warmup = get_alternatives(Exercise("jog", "Jog", "5 min", "warmup"))
    assert [alt.name for alt in warmup][:2] == ["Jumping Jacks", "High Knees"]
    assert all(alt.category == "warmup" for alt in warmup)
    assert len(get_alternatives(Exercise("x", "Stretch", "5 min", "cooldown"))) == 4


def test_current_exercise_filtered_out():
    current = EXERCISE_ALTERNATIVES["main"][0]
    options = get_alternatives(current)
    assert current not in options
    assert len(options) == len(EXERCISE_ALTERNATIVES["main"]) - 1


def test_swap_with_alternative(session):
    plank = next(a for a in get_alternatives(session.state.exercise("ohp")) if a.name == "Plank")
    assert session.swap_exercise("ohp", plank)
    assert session.sets_for("ohp") == (False,)
