"""
HabitLens - помесячная агрегация
Окно из N месяцев (по умолчанию 6, включая месяц отсчёта), от старого к новому.
"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from ..models import (
    Habit,
    HabitMonthCount,
    MONTH_SHORT,
    MonthBarView,
    MonthlyRow,
    MonthTotal,
    OverviewView,
    TrendLine,
    TrendPoint,
)
from ..utils.datetime_utils import add_months, first_of_month, month_key
from ..utils.numbers import at_least_one
from .habit_metrics import count_in_month

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_MONTHS = 6


def month_label(d: date) -> str:
    """«Окт/25»"""
    return f"{MONTH_SHORT[d.month - 1]}/{str(d.year)[2:]}"


def build_monthly_rows(habits: Iterable[Habit], reference_date: date,
                       window_months: int = DEFAULT_WINDOW_MONTHS) -> List[MonthlyRow]:
    habits = list(habits)
    rows = []
    for i in range(window_months - 1, -1, -1):
        month_start = add_months(reference_date, -i)
        prefix = month_key(month_start)
        rows.append(MonthlyRow(
            year=month_start.year,
            month_index=month_start.month - 1,
            month_key=prefix,
            label=MONTH_SHORT[month_start.month - 1],
            per_habit={h.id: count_in_month(h.completed_dates, prefix) for h in habits},
        ))
    return rows


def habit_window_total(rows: Iterable[MonthlyRow], habit_id: str) -> int:
    return sum(row.per_habit.get(habit_id, 0) for row in rows)


def six_month_totals(rows: List[MonthlyRow]) -> Dict[str, int]:
    """Сумма по окну для каждой привычки"""
    totals: Dict[str, int] = {}
    for row in rows:
        for habit_id, count in row.per_habit.items():
            totals[habit_id] = totals.get(habit_id, 0) + count
    return totals


def monthly_totals(rows: Iterable[MonthlyRow]) -> List[MonthTotal]:
    return [MonthTotal(month_key=r.month_key, label=r.label, total=r.total) for r in rows]


def rank_by_total(habits: Iterable[Habit], totals: Dict[str, int]) -> List[Habit]:
    """По сумме за окно по убыванию, при равенстве по имени"""
    return sorted(habits, key=lambda h: (-totals.get(h.id, 0), h.name))


def month_ranking(habits: Iterable[Habit], row: MonthlyRow) -> List[HabitMonthCount]:
    items = [HabitMonthCount(habit_id=h.id, name=h.name, completions=row.per_habit.get(h.id, 0))
             for h in habits]
    items.sort(key=lambda x: (-x.completions, x.name))
    return items


def find_row(rows: List[MonthlyRow], selected: date) -> Optional[MonthlyRow]:
    """Строка выбранного месяца; если её нет в окне — самая новая"""
    for row in rows:
        if row.year == selected.year and row.month_index == selected.month - 1:
            return row
    return rows[-1] if rows else None


def can_go_next(selected: date, reference_date: date) -> bool:
    return add_months(selected, 1) <= first_of_month(reference_date)


def month_bar_view(habits: Iterable[Habit], rows: List[MonthlyRow], selected: date,
                   reference_date: date, query: str = "") -> MonthBarView:
    habits = list(habits)
    row = find_row(rows, selected)
    if row is None:
        return MonthBarView(year=selected.year, month_index=selected.month - 1,
                            label=month_label(selected), can_go_next=can_go_next(selected, reference_date))

    ranking = month_ranking(habits, row)
    # максимум считается до фильтра по имени
    max_completions = at_least_one(max((x.completions for x in ranking), default=0))

    q = query.strip().lower()
    if q:
        ranking = [x for x in ranking if q in x.name.lower()]

    row_start = date(row.year, row.month_index + 1, 1)
    return MonthBarView(
        year=row.year,
        month_index=row.month_index,
        label=month_label(row_start),
        habits=ranking,
        max_completions=max_completions,
        can_go_next=can_go_next(row_start, reference_date),
    )


def habit_trend_lines(habits: Iterable[Habit], rows: List[MonthlyRow]) -> List[TrendLine]:
    lines = []
    for h in habits:
        points = [TrendPoint(month_key=r.month_key, label=r.label, completions=r.per_habit.get(h.id, 0))
                  for r in rows]
        lines.append(TrendLine(
            habit_id=h.id,
            name=h.name,
            total=habit_window_total(rows, h.id),
            max_value=at_least_one(max((p.completions for p in points), default=0)),
            points=points,
        ))
    return lines


def overview_view(habits: Iterable[Habit], rows: List[MonthlyRow]) -> OverviewView:
    """Итоги по месяцам, топ/аутсайдеры текущего месяца и линии по привычкам"""
    habits = list(habits)
    totals = monthly_totals(rows)
    ranking = month_ranking(habits, rows[-1]) if rows else []

    window = six_month_totals(rows)
    ordered = rank_by_total(habits, window)

    return OverviewView(
        totals=totals,
        max_total=at_least_one(max((t.total for t in totals), default=0)),
        top=ranking[:3],
        bottom=list(reversed(ranking[-3:])),
        lines=habit_trend_lines(ordered, rows),
    )
