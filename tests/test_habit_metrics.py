from datetime import date

from habitlens.core.habit_metrics import (
    compute_streak,
    derive_metrics,
    habit_summary,
    list_habits,
    month_grid,
    streak_anchor,
)
from habitlens.models import HabitOrder, HabitTab, ListOptions

from .conftest import REF, make_habit, month_days


def test_streak_counts_back_from_today():
    dates = {"2025-10-13", "2025-10-14", "2025-10-15"}
    assert compute_streak(dates, REF) == 3


def test_streak_survives_until_today_is_done():
    dates = {"2025-10-13", "2025-10-14"}
    assert streak_anchor(dates, REF) == date(2025, 10, 14)
    assert compute_streak(dates, REF) == 2


def test_streak_stops_at_gap():
    dates = {"2025-10-10", "2025-10-12", "2025-10-13"}
    assert compute_streak(dates, REF) == 2


def test_streak_anchors_on_latest_completion():
    assert compute_streak({"2025-10-20", "2025-10-21", "2025-10-14"}, REF) == 2
    assert compute_streak(set(), REF) == 0


def test_streak_crosses_month_boundary():
    dates = {"2025-09-29", "2025-09-30", "2025-10-01"}
    assert compute_streak(dates, date(2025, 10, 1)) == 3


def test_single_completion_today():
    m = derive_metrics(make_habit(1, "Читать", ["2025-10-15"]), REF)
    assert m.streak == 1
    assert m.month_count == 1
    assert m.month_progress_pct == 1 / 31
    assert m.due_today is False
    assert m.last_date == "2025-10-15"
    assert m.total == 1


def test_habit_without_history():
    m = derive_metrics(make_habit(1, "Бег"), REF)
    assert m.streak == 0
    assert m.month_count == 0
    assert m.due_today is True
    assert m.last_date is None


def test_month_progress_is_bounded():
    habit = make_habit(1, "Вода", month_days("2025-10", 31) + month_days("2025-09", 30))
    m = derive_metrics(habit, REF)
    assert m.month_count == 31
    assert m.month_progress_pct == 1.0


def test_derivation_does_not_change_habit():
    habit = make_habit(1, "Читать", ["2025-10-14", "2025-10-15"])
    before = habit.completed_dates
    derive_metrics(habit, REF)
    derive_metrics(habit, date(2025, 12, 1))
    assert habit.completed_dates == before


def _sample_habits():
    return [
        make_habit(1, "бег", ["2025-10-15"]),
        make_habit(2, "Английский", ["2025-10-13", "2025-10-14"]),
        make_habit(3, "Вода", month_days("2025-10", 5)),
    ]


def test_list_habits_tabs():
    habits = _sample_habits()
    done = list_habits(habits, REF, ListOptions(tab=HabitTab.DONE))
    assert [m.habit_id for m in done] == ["1"]

    due = list_habits(habits, REF, ListOptions(tab=HabitTab.TODAY))
    assert {m.habit_id for m in due} == {"2", "3"}


def test_list_habits_ordering_and_query():
    habits = _sample_habits()
    by_streak = list_habits(habits, REF)
    assert [m.habit_id for m in by_streak] == ["3", "2", "1"]

    by_name = list_habits(habits, REF, ListOptions(order_by=HabitOrder.NAME))
    assert [m.name for m in by_name] == ["Английский", "бег", "Вода"]

    by_month = list_habits(habits, REF, ListOptions(order_by=HabitOrder.MONTH))
    assert by_month[0].habit_id == "3"

    found = list_habits(habits, REF, ListOptions(query="  ВОД "))
    assert [m.habit_id for m in found] == ["3"]


def test_habit_summary():
    habits = _sample_habits()
    metrics = [derive_metrics(h, REF) for h in habits]
    summary = habit_summary(metrics, REF)
    assert summary.active == 3
    assert summary.due_today == 2
    assert summary.done_today == 1
    assert summary.month_total == 1 + 2 + 5


def test_done_on_reference_date_with_later_completion():
    habits = [make_habit(1, "Читать", ["2025-10-10", "2025-10-12"])]
    ref = date(2025, 10, 10)

    done = list_habits(habits, ref, ListOptions(tab=HabitTab.DONE))
    assert [m.habit_id for m in done] == ["1"]
    assert list_habits(habits, ref, ListOptions(tab=HabitTab.TODAY)) == []

    summary = habit_summary((derive_metrics(h, ref) for h in habits), ref)
    assert summary.active == 1
    assert summary.due_today == 0
    assert summary.done_today == 1


def test_month_grid():
    habit = make_habit(1, "Читать", ["2025-10-01", "2025-10-15", "2025-11-01"])
    grid = month_grid(habit, 2025, 9, REF)
    assert grid.title == "Октябрь 2025"
    assert grid.leading_pads == 3  # 1 октября 2025 — среда
    assert grid.days_in_month == 31
    assert len(grid.days) == 31
    assert grid.month_count == 2
    assert [d.day for d in grid.days if d.done] == [1, 15]
    assert [d.day for d in grid.days if d.is_today] == [15]
    assert grid.progress_pct == 2 / 31


def test_month_grid_february():
    grid = month_grid(make_habit(1, "Читать"), 2024, 1, REF)
    assert grid.days_in_month == 29
    assert grid.leading_pads == 4  # 1 февраля 2024 — четверг
    assert not any(d.is_today for d in grid.days)


def test_full_run_keeps_streak_until_next_day():
    day = date(2025, 10, 22)
    habit = make_habit("1", "Читать", ["2025-10-20", "2025-10-21", "2025-10-22"])

    m = derive_metrics(habit, day)
    assert (m.streak, m.month_count, m.due_today, m.last_date) == (3, 3, False, "2025-10-22")

    m = derive_metrics(habit, date(2025, 10, 23))
    assert (m.streak, m.due_today, m.last_date) == (3, True, "2025-10-22")


def test_gap_before_today_resets_streak():
    dates = {"2025-10-12", "2025-10-13", "2025-10-15"}
    assert compute_streak(dates, REF) == 1


def test_month_progress_bound_over_a_year():
    habit = make_habit(1, "Вода", month_days("2025-02", 28) + month_days("2025-10", 31))
    day = date(2025, 1, 1)
    while day.year == 2025:
        assert 0.0 <= derive_metrics(habit, day).month_progress_pct <= 1.0
        day = date.fromordinal(day.toordinal() + 7)
