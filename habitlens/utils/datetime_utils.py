# utils/datetime_utils.py

import calendar
from datetime import date, datetime, timedelta
from typing import List, Union

import pytz

DEFAULT_TZ = "UTC"

DateLike = Union[date, datetime]


def now_in(tz_name: str = DEFAULT_TZ) -> datetime:
    return datetime.now(pytz.timezone(tz_name))


def today(tz_name: str = DEFAULT_TZ) -> date:
    """Календарный «сегодня» в заданной зоне. Аналитика часы не читает."""
    return now_in(tz_name).date()


def _as_date(d: DateLike) -> date:
    # aware datetime сохраняет свою локальную дату, без сдвига в UTC
    if isinstance(d, datetime):
        return d.date()
    return d


def to_date_key(d: DateLike) -> str:
    d = _as_date(d)
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_date_key(key: str) -> date:
    """Разбор ключа yyyy-MM-dd. ValueError для некорректной даты."""
    if not isinstance(key, str) or len(key) != 10 or key[4] != "-" or key[7] != "-":
        raise ValueError(f"Некорректный ключ даты: {key!r}")
    parsed = datetime.strptime(key, "%Y-%m-%d").date()
    # strptime пропускает "2025-10- 5"; ключ должен совпадать с каноническим
    if to_date_key(parsed) != key:
        raise ValueError(f"Некорректный ключ даты: {key!r}")
    return parsed


def month_key(d: DateLike) -> str:
    d = _as_date(d)
    return f"{d.year:04d}-{d.month:02d}"


def first_of_month(d: DateLike) -> date:
    return _as_date(d).replace(day=1)


def add_months(d: DateLike, delta: int) -> date:
    d = _as_date(d)
    total = d.year * 12 + (d.month - 1) + delta
    return date(total // 12, total % 12 + 1, 1)


def days_in_month(year: int, month_index: int) -> int:
    """month_index: 0..11"""
    return calendar.monthrange(year, month_index + 1)[1]


def last_of_month(d: DateLike) -> date:
    d = _as_date(d)
    return d.replace(day=days_in_month(d.year, d.month - 1))


def shift_days(d: DateLike, days: int) -> date:
    return _as_date(d) + timedelta(days=days)


def date_range(start: DateLike, end: DateLike) -> List[date]:
    start, end = _as_date(start), _as_date(end)
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def weekday_index(d: DateLike) -> int:
    """0 = воскресенье ... 6 = суббота"""
    return (_as_date(d).weekday() + 1) % 7
