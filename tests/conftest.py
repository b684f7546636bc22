from datetime import date

import pytest

from habitlens.models import Habit

# среда, 15 октября 2025
REF = date(2025, 10, 15)


def make_habit(habit_id, name, dates=()):
    return Habit(id=str(habit_id), name=name, completed_dates=frozenset(dates))


def month_days(prefix, count, start=1):
    """Ключи prefix-01..prefix-NN"""
    return [f"{prefix}-{day:02d}" for day in range(start, start + count)]


@pytest.fixture
def ref():
    return REF
