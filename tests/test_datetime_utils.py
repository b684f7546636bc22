from datetime import date, datetime

import pytest
import pytz

from habitlens.utils.datetime_utils import (
    add_months,
    date_range,
    days_in_month,
    first_of_month,
    last_of_month,
    month_key,
    parse_date_key,
    shift_days,
    to_date_key,
    weekday_index,
)
from habitlens.models import Habit
from habitlens.utils.numbers import at_least_one, clamp01, round_half_up
from habitlens.utils.validators import clean_date_keys, is_valid_date, is_valid_habit_name


def test_to_date_key_zero_pads():
    assert to_date_key(date(2025, 1, 5)) == "2025-01-05"
    assert month_key(date(2025, 1, 5)) == "2025-01"


def test_to_date_key_keeps_local_date_of_aware_datetime():
    tokyo = pytz.timezone("Asia/Tokyo")
    moment = tokyo.localize(datetime(2025, 10, 16, 1, 30))
    assert to_date_key(moment) == "2025-10-16"


def test_parse_date_key_roundtrip():
    assert parse_date_key("2024-02-29") == date(2024, 2, 29)


@pytest.mark.parametrize("bad", ["2025-1-05", "2025-13-01", "2025-02-30", "20251015", "", "abcd-ef-gh", "2025-10- 5", " 2025-10-5"])
def test_parse_date_key_rejects_malformed(bad):
    with pytest.raises(ValueError):
        parse_date_key(bad)


def test_add_months_crosses_year_boundaries():
    assert add_months(date(2025, 1, 31), -1) == date(2024, 12, 1)
    assert add_months(date(2025, 11, 15), 3) == date(2026, 2, 1)
    assert add_months(date(2025, 10, 15), -5) == date(2025, 5, 1)


def test_month_bounds():
    assert days_in_month(2024, 1) == 29
    assert days_in_month(2025, 1) == 28
    assert days_in_month(2025, 9) == 31
    assert first_of_month(date(2025, 10, 15)) == date(2025, 10, 1)
    assert last_of_month(date(2025, 2, 10)) == date(2025, 2, 28)


def test_weekday_index_starts_on_sunday():
    assert weekday_index(date(2025, 10, 12)) == 0  # воскресенье
    assert weekday_index(date(2025, 10, 13)) == 1
    assert weekday_index(date(2025, 10, 18)) == 6


def test_date_range_is_inclusive():
    days = date_range(date(2025, 2, 27), date(2025, 3, 2))
    assert [to_date_key(d) for d in days] == ["2025-02-27", "2025-02-28", "2025-03-01", "2025-03-02"]
    assert shift_days(date(2025, 3, 1), -1) == date(2025, 2, 28)


def test_clean_date_keys_drops_invalid_and_duplicates(caplog):
    raw = ["2025-10-02", "bad", "2025-10-01", "2025-10-02", None, "2025-02-30"]
    assert clean_date_keys(raw, source="test") == ["2025-10-01", "2025-10-02"]
    assert "Отброшено некорректных дат 3" in caplog.text


def test_clean_date_keys_drops_space_padded_day():
    assert not is_valid_date("2025-10- 5")
    assert clean_date_keys(["2025-10- 5", "2025-10-05", "2025-10-06"]) == ["2025-10-05", "2025-10-06"]

    habit = Habit.from_dict({"id": "1", "name": "Читать", "completedDates": ["2025-10- 5", "2025-10-06"]})
    assert habit.completed_dates == frozenset({"2025-10-06"})


def test_validators():
    assert is_valid_date("2025-10-15")
    assert not is_valid_date(None)
    assert is_valid_habit_name("  Читать ")
    assert not is_valid_habit_name("   ")
    assert not is_valid_habit_name("x" * 101)


def test_numbers():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(33.333) == 33
    assert clamp01(1.2) == 1.0
    assert clamp01(-0.1) == 0.0
    assert at_least_one(0) == 1
    assert at_least_one(7) == 7


def test_date_key_roundtrip_for_every_day_of_leap_year():
    for day in date_range(date(2024, 1, 1), date(2024, 12, 31)):
        key = to_date_key(day)
        assert to_date_key(parse_date_key(key)) == key
