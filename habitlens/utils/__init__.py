from .datetime_utils import (
    to_date_key,
    parse_date_key,
    month_key,
    add_months,
    days_in_month,
    first_of_month,
    last_of_month,
    shift_days,
    date_range,
    weekday_index,
    today,
)

__all__ = [
    'to_date_key',
    'parse_date_key',
    'month_key',
    'add_months',
    'days_in_month',
    'first_of_month',
    'last_of_month',
    'shift_days',
    'date_range',
    'weekday_index',
    'today',
]
