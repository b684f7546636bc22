"""
HabitLens - рейтинги и концентрация
Парето за окно, постоянство за 30 дней и привычки «в зоне риска» (14 дней).
"""

from datetime import date
from typing import Iterable, List, Optional

from ..models import ConsistencyRow, Habit, MonthlyRow, ParetoResult, ParetoRow
from ..utils.datetime_utils import shift_days, to_date_key
from ..utils.numbers import at_least_one, round_half_up
from .monthly import build_monthly_rows, six_month_totals

PARETO_THRESHOLD = 80.0
CONSISTENCY_DAYS = 30
AT_RISK_DAYS = 14


def pareto(habits: Iterable[Habit], rows: List[MonthlyRow]) -> ParetoResult:
    """Кривая Парето по суммам за окно.

    idx80 — первый индекс (с нуля), где накопленная доля >= 80%; если такого
    нет (все суммы нулевые), возвращается длина списка.
    """
    window = six_month_totals(rows)
    items = sorted(habits, key=lambda h: (-window.get(h.id, 0), h.name))
    grand = at_least_one(sum(window.get(h.id, 0) for h in items))

    result_rows = []
    acc = 0
    for rank, habit in enumerate(items, start=1):
        total = window.get(habit.id, 0)
        acc += total
        result_rows.append(ParetoRow(
            habit_id=habit.id,
            name=habit.name,
            total=total,
            share_pct=total / grand * 100,
            cumulative_pct=acc / grand * 100,
            rank=rank,
        ))

    idx80 = next((i for i, r in enumerate(result_rows) if r.cumulative_pct >= PARETO_THRESHOLD),
                 len(result_rows))

    return ParetoResult(
        rows=result_rows,
        grand_total=grand,
        idx80=idx80,
        habits_for_80=min(idx80 + 1, len(result_rows)),
    )


def pareto_for(habits: Iterable[Habit], reference_date: date,
               window_months: int = 6, rows: Optional[List[MonthlyRow]] = None) -> ParetoResult:
    habits = list(habits)
    if rows is None:
        rows = build_monthly_rows(habits, reference_date, window_months)
    return pareto(habits, rows)


def _window_keys(reference_date: date, days: int):
    return to_date_key(shift_days(reference_date, -(days - 1))), to_date_key(reference_date)


def count_between(dates: Iterable[str], start_key: str, end_key: str) -> int:
    return sum(1 for k in dates if start_key <= k <= end_key)


def consistency(habits: Iterable[Habit], reference_date: date,
                days: int = CONSISTENCY_DAYS) -> List[ConsistencyRow]:
    """Доля дней с выполнением за последние `days` дней, включая дату отсчёта"""
    start_key, end_key = _window_keys(reference_date, days)
    rows = []
    for h in habits:
        done = count_between(h.completed_dates, start_key, end_key)
        rows.append(ConsistencyRow(habit_id=h.id, name=h.name, done=done,
                                   pct=round_half_up(done / days * 100)))
    rows.sort(key=lambda r: (-r.pct, r.name))
    return rows


def at_risk(habits: Iterable[Habit], reference_date: date, days: int = AT_RISK_DAYS) -> List[Habit]:
    """Привычки без выполнений в окне [D-13, D]; порядок входа сохраняется"""
    start_key, end_key = _window_keys(reference_date, days)
    return [h for h in habits if count_between(h.completed_dates, start_key, end_key) == 0]
