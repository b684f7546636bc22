"""
HabitLens - показатели одной привычки
Серия, выполнения за месяц, прогресс месяца, «сделать сегодня», последняя дата.
Все функции чистые: дата отсчёта передаётся явно.
"""

import logging
from datetime import date
from typing import AbstractSet, Iterable, List, Optional

from ..models import (
    CalendarDay,
    DerivedHabitMetrics,
    Habit,
    HabitOrder,
    HabitSummary,
    HabitTab,
    ListOptions,
    MONTH_NAMES,
    MonthGrid,
)
from ..utils.datetime_utils import (
    days_in_month,
    month_key,
    parse_date_key,
    shift_days,
    to_date_key,
    weekday_index,
)
from ..utils.numbers import clamp01

logger = logging.getLogger(__name__)


def streak_anchor(dates: AbstractSet[str], reference_date: date) -> Optional[date]:
    """День, от которого считается серия.

    Сегодня, если привычка выполнена сегодня, иначе самый поздний
    выполненный день из набора.
    """
    if to_date_key(reference_date) in dates:
        return reference_date
    if not dates:
        return None
    return parse_date_key(max(dates))


def compute_streak(dates: AbstractSet[str], reference_date: date) -> int:
    anchor = streak_anchor(dates, reference_date)
    if anchor is None:
        return 0

    streak = 0
    current = anchor
    while to_date_key(current) in dates:
        streak += 1
        current = shift_days(current, -1)
    return streak


def count_in_month(dates: Iterable[str], month_prefix: str) -> int:
    return sum(1 for k in dates if k.startswith(month_prefix))


def derive_metrics(habit: Habit, reference_date: date) -> DerivedHabitMetrics:
    dates = habit.completed_dates
    month_count = count_in_month(dates, month_key(reference_date))
    total_days = days_in_month(reference_date.year, reference_date.month - 1)

    return DerivedHabitMetrics(
        habit_id=habit.id,
        name=habit.name,
        streak=compute_streak(dates, reference_date),
        month_count=month_count,
        month_progress_pct=clamp01(month_count / total_days),
        due_today=to_date_key(reference_date) not in dates,
        last_date=habit.last_date,
        total=len(dates),
    )


def derive_all(habits: Iterable[Habit], reference_date: date) -> List[DerivedHabitMetrics]:
    return [derive_metrics(h, reference_date) for h in habits]


def is_done_on(metrics: DerivedHabitMetrics) -> bool:
    return not metrics.due_today


def list_habits(habits: Iterable[Habit], reference_date: date,
                options: Optional[ListOptions] = None) -> List[DerivedHabitMetrics]:
    """Список привычек с поиском, вкладкой и сортировкой"""
    options = options or ListOptions()
    q = options.query.strip().lower()

    rows = [m for m in derive_all(habits, reference_date) if q in m.name.lower()]

    if options.tab == HabitTab.TODAY:
        rows = [m for m in rows if m.due_today]
    elif options.tab == HabitTab.DONE:
        rows = [m for m in rows if is_done_on(m)]

    if options.order_by == HabitOrder.STREAK:
        rows.sort(key=lambda m: -m.streak)
    elif options.order_by == HabitOrder.NAME:
        rows.sort(key=lambda m: m.name.casefold())
    elif options.order_by == HabitOrder.MONTH:
        rows.sort(key=lambda m: -m.month_count)

    return rows


def habit_summary(metrics: Iterable[DerivedHabitMetrics], reference_date: date) -> HabitSummary:
    """KPI для шапки: активные, на сегодня, за месяц, сделано сегодня"""
    metrics = list(metrics)
    return HabitSummary(
        active=len(metrics),
        due_today=sum(1 for m in metrics if m.due_today),
        month_total=sum(m.month_count for m in metrics),
        done_today=sum(1 for m in metrics if is_done_on(m)),
    )


def month_grid(habit: Habit, year: int, month_index: int, reference_date: date) -> MonthGrid:
    """Календарь привычки на месяц (month_index 0..11)"""
    first = date(year, month_index + 1, 1)
    total_days = days_in_month(year, month_index)
    ref_key = to_date_key(reference_date)

    days = []
    for day in range(1, total_days + 1):
        key = to_date_key(first.replace(day=day))
        days.append(CalendarDay(
            day=day,
            date_key=key,
            done=key in habit.completed_dates,
            is_today=key == ref_key,
        ))

    month_count = count_in_month(habit.completed_dates, month_key(first))
    return MonthGrid(
        habit_id=habit.id,
        year=year,
        month_index=month_index,
        title=f"{MONTH_NAMES[month_index]} {year}",
        leading_pads=weekday_index(first),
        days_in_month=total_days,
        month_count=month_count,
        progress_pct=clamp01(month_count / total_days),
        days=days,
    )
