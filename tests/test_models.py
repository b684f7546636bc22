import pytest

from habitlens.models import AnalysisOptions, Habit, ValidationError

from .conftest import REF, make_habit


def test_from_dict_cleans_dates():
    habit = Habit.from_dict({
        "id": 5,
        "name": "Бег",
        "completedDates": ["2025-10-02", "2025-10-01", "2025-10-02", "вчера"],
        "createdAt": "2025-01-01T00:00:00+00:00",
    })
    assert habit.id == "5"
    assert habit.completed_dates == frozenset({"2025-10-01", "2025-10-02"})
    assert habit.last_date == "2025-10-02"
    assert habit.to_dict() == {
        "id": "5",
        "name": "Бег",
        "completedDates": ["2025-10-01", "2025-10-02"],
        "createdAt": "2025-01-01T00:00:00+00:00",
    }


def test_from_dict_requires_id():
    with pytest.raises(ValidationError):
        Habit.from_dict({"name": "Без id"})


def test_habit_is_immutable():
    habit = make_habit(1, "Бег", ["2025-10-01"])
    with pytest.raises(AttributeError):
        habit.name = "Ходьба"
    updated = habit.with_dates(["2025-10-02"])
    assert habit.completed_dates == frozenset({"2025-10-01"})
    assert updated.completed_dates == frozenset({"2025-10-02"})


def test_analysis_options_filter():
    habits = [make_habit(1, "Утренний БЕГ"), make_habit(2, "Вода")]
    assert [h.id for h in AnalysisOptions(REF, habit_filter=" бег ").select(habits)] == ["1"]
    assert len(AnalysisOptions(REF, habit_filter="").select(habits)) == 2
