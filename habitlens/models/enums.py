# models/enums.py

from enum import Enum


class HabitTab(str, Enum):
    ALL = "all"
    TODAY = "today"   # ещё нужно сделать сегодня
    DONE = "done"     # уже сделано сегодня


class HabitOrder(str, Enum):
    STREAK = "streak"
    NAME = "name"
    MONTH = "month"


class CompareFocus(str, Enum):
    ALL = "all"
    GAINS = "gains"
    LOSSES = "losses"


MONTH_SHORT = ["Янв", "Фев", "Мар", "Апр", "Май", "Июн",
               "Июл", "Авг", "Сен", "Окт", "Ноя", "Дек"]

MONTH_NAMES = ["Январь", "Февраль", "Март", "Апрель", "Май", "Июнь",
               "Июль", "Август", "Сентябрь", "Октябрь", "Ноябрь", "Декабрь"]

# 0 = воскресенье
WEEKDAY_LABELS = ["Вс", "Пн", "Вт", "Ср", "Чт", "Пт", "Сб"]
