from habitlens.core.monthly import build_monthly_rows
from habitlens.core.ranking import at_risk, consistency, pareto, pareto_for

from .conftest import REF, make_habit, month_days


def test_pareto_single_habit_carries_80_percent():
    habits = [
        make_habit(1, "Вода", month_days("2025-10", 1)),
        make_habit(2, "Бег", month_days("2025-10", 8)),
        make_habit(3, "Аптека", month_days("2025-09", 1)),
    ]
    result = pareto_for(habits, REF)

    assert [r.habit_id for r in result.rows] == ["2", "3", "1"]
    assert result.grand_total == 10
    assert result.rows[0].share_pct == 80.0
    assert result.idx80 == 0
    assert result.habits_for_80 == 1
    assert [r.rank for r in result.rows] == [1, 2, 3]


def test_pareto_cumulative_is_monotonic_and_ends_at_100():
    habits = [make_habit(i, f"H{i}", month_days("2025-10", i)) for i in range(1, 6)]
    result = pareto_for(habits, REF)

    cumulative = [r.cumulative_pct for r in result.rows]
    assert cumulative == sorted(cumulative)
    assert abs(cumulative[-1] - 100.0) < 1e-9
    # 5+4+3 = 12 из 15 = 80%
    assert result.idx80 == 2
    assert result.habits_for_80 == 3


def test_pareto_without_completions():
    habits = [make_habit(1, "Бег"), make_habit(2, "Вода"), make_habit(3, "Аптека")]
    rows = build_monthly_rows(habits, REF)
    result = pareto(habits, rows)

    assert result.grand_total == 1
    assert result.idx80 == 3
    assert result.habits_for_80 == 3
    assert all(r.cumulative_pct == 0 for r in result.rows)


def test_pareto_empty():
    result = pareto_for([], REF)
    assert result.rows == []
    assert result.idx80 == 0
    assert result.habits_for_80 == 0


def test_pareto_ignores_months_outside_window():
    habits = [make_habit(1, "Бег", month_days("2025-04", 10)), make_habit(2, "Вода", ["2025-10-01"])]
    result = pareto_for(habits, REF)
    assert result.rows[0].habit_id == "2"
    assert result.grand_total == 1


def test_consistency_over_last_30_days():
    habits = [
        make_habit(1, "Бег", month_days("2025-10", 15) + ["2025-09-15"]),
        make_habit(2, "Вода", ["2025-09-16"]),
        make_habit(3, "Аптека", month_days("2025-10", 10) + ["2025-10-16"]),
    ]
    rows = consistency(habits, REF)

    assert [(r.habit_id, r.done, r.pct) for r in rows] == [
        ("1", 15, 50),
        ("3", 10, 33),
        ("2", 1, 3),
    ]


def test_consistency_ties_by_name():
    rows = consistency([make_habit(1, "Вода"), make_habit(2, "Бег")], REF)
    assert [r.name for r in rows] == ["Бег", "Вода"]
    assert all(r.pct == 0 for r in rows)


def test_at_risk_window_is_14_days():
    habits = [
        make_habit(1, "Последний раз D-14", ["2025-10-01"]),
        make_habit(2, "Последний раз D-13", ["2025-10-02"]),
        make_habit(3, "Никогда"),
        make_habit(4, "Только в будущем", ["2025-10-20"]),
        make_habit(5, "Сегодня", ["2025-10-15"]),
    ]
    found = at_risk(habits, REF)
    assert [h.id for h in found] == ["1", "3", "4"]


def test_at_risk_keeps_input_order():
    habits = [make_habit(i, f"H{i}") for i in (9, 2, 7)]
    assert [h.id for h in at_risk(habits, REF)] == ["9", "2", "7"]


def test_pareto_eighty_twenty():
    habits = [
        make_habit(1, "Малая", [f"2025-{m:02d}-{d:02d}" for m in (9, 10) for d in range(1, 11)]),
        make_habit(2, "Большая", [f"2025-{m:02d}-{d:02d}" for m in range(5, 11) for d in range(1, 15)][:80]),
    ]
    result = pareto_for(habits, REF)

    top, second = result.rows
    assert (top.habit_id, top.total, top.share_pct, top.cumulative_pct) == ("2", 80, 80.0, 80.0)
    assert (second.habit_id, second.total, second.share_pct, second.cumulative_pct) == ("1", 20, 20.0, 100.0)
    assert result.idx80 == 0
