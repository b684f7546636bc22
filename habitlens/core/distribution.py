"""
HabitLens - распределения
Выполнения по дням недели за 6 календарных месяцев и тепловая карта за 28 дней.
"""

from datetime import date
from typing import Iterable

from ..models import Habit, Heatmap, HeatmapCell, WEEKDAY_LABELS, WeekdayDistribution
from ..utils.datetime_utils import (
    add_months,
    date_range,
    last_of_month,
    parse_date_key,
    shift_days,
    to_date_key,
    weekday_index,
)
from ..utils.numbers import at_least_one

WEEKDAY_WINDOW_MONTHS = 6
HEATMAP_DAYS = 28


def weekday_distribution(habits: Iterable[Habit], reference_date: date,
                         window_months: int = WEEKDAY_WINDOW_MONTHS) -> WeekdayDistribution:
    """Гистограмма по дням недели, 0 = воскресенье.

    Окно: с 1-го числа (месяц отсчёта - 5) по последний день месяца отсчёта.
    Лучший и худший день — первый индекс максимума и минимума.
    """
    start_key = to_date_key(add_months(reference_date, -(window_months - 1)))
    end_key = to_date_key(last_of_month(reference_date))

    counts = [0] * 7
    for habit in habits:
        for key in habit.completed_dates:
            if start_key <= key <= end_key:
                counts[weekday_index(parse_date_key(key))] += 1

    return WeekdayDistribution(
        counts=counts,
        labels=list(WEEKDAY_LABELS),
        start_key=start_key,
        end_key=end_key,
        max_count=at_least_one(max(counts)),
        best_index=counts.index(max(counts)),
        worst_index=counts.index(min(counts)),
    )


def completion_heatmap(habits: Iterable[Habit], reference_date: date,
                       days: int = HEATMAP_DAYS) -> Heatmap:
    """Сколько привычек выполнено в каждый из последних `days` дней, от старого к новому"""
    habits = list(habits)
    cells = []
    for day in date_range(shift_days(reference_date, -(days - 1)), reference_date):
        key = to_date_key(day)
        count = sum(1 for h in habits if key in h.completed_dates)
        cells.append(HeatmapCell(date_key=key, count=count))

    max_count = at_least_one(max((c.count for c in cells), default=0))
    for cell in cells:
        cell.intensity = cell.count / max_count

    return Heatmap(cells=cells, max_count=max_count)
