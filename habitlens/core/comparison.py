"""
HabitLens - сравнение месяцев
Произвольная пара месяцев и «импульс» (текущий месяц против предыдущего).
"""

from datetime import date
from typing import Iterable, List

from ..models import CompareFocus, ComparisonRow, Habit, MonthComparison, Momentum
from ..utils.datetime_utils import add_months, first_of_month, month_key
from ..utils.numbers import at_least_one, round_half_up
from .habit_metrics import count_in_month
from .monthly import month_label

TOP_N = 3


def pct_change(old: int, new: int) -> int:
    """Изменение в процентах; рост с нуля считается как 100%"""
    if old == 0 and new == 0:
        return 0
    if old == 0:
        return 100
    return round_half_up((new - old) / old * 100)


def comparison_rows(habits: Iterable[Habit], month1: date, month2: date) -> List[ComparisonRow]:
    """Строки в порядке входных привычек"""
    mk1, mk2 = month_key(month1), month_key(month2)
    rows = []
    for h in habits:
        a = count_in_month(h.completed_dates, mk1)
        b = count_in_month(h.completed_dates, mk2)
        rows.append(ComparisonRow(habit_id=h.id, name=h.name, count_month1=a, count_month2=b, diff=b - a))
    return rows


def compare_months(habits: Iterable[Habit], month1: date, month2: date,
                   focus: CompareFocus = CompareFocus.ALL,
                   changed_only: bool = False) -> MonthComparison:
    """Сравнение month1 -> month2.

    Порядок: |diff| по убыванию, затем выполнения во втором месяце по
    убыванию, затем имя. Итоги и проценты считаются по отображаемым строкам.
    """
    base = comparison_rows(habits, month1, month2)
    base.sort(key=lambda r: (-abs(r.diff), -r.count_month2, r.name))

    top_gains = [r for r in base if r.diff > 0][:TOP_N]
    top_losses = [r for r in base if r.diff < 0][:TOP_N]

    rows = base
    if focus == CompareFocus.GAINS:
        rows = [r for r in rows if r.diff > 0]
    elif focus == CompareFocus.LOSSES:
        rows = [r for r in rows if r.diff < 0]
    if changed_only:
        rows = [r for r in rows if r.diff != 0]

    total1 = sum(r.count_month1 for r in rows)
    total2 = sum(r.count_month2 for r in rows)

    return MonthComparison(
        month1_key=month_key(month1),
        month2_key=month_key(month2),
        label1=month_label(first_of_month(month1)),
        label2=month_label(first_of_month(month2)),
        rows=rows,
        top_gains=top_gains,
        top_losses=top_losses,
        total_month1=total1,
        total_month2=total2,
        total_diff=total2 - total1,
        total_pct=pct_change(total1, total2),
        max_value=at_least_one(max((max(r.count_month1, r.count_month2) for r in rows), default=0)),
    )


def momentum(habits: Iterable[Habit], reference_date: date) -> Momentum:
    """Текущий месяц против предыдущего.

    Топ-3 роста и спада берутся из полного списка, строки с нулевой
    разницей не отбрасываются. При равенстве сохраняется входной порядок.
    """
    previous = add_months(reference_date, -1)
    current = first_of_month(reference_date)
    rows = comparison_rows(habits, previous, current)

    return Momentum(
        previous_key=month_key(previous),
        current_key=month_key(current),
        rows=rows,
        gainers=sorted(rows, key=lambda r: -r.diff)[:TOP_N],
        decliners=sorted(rows, key=lambda r: r.diff)[:TOP_N],
    )
