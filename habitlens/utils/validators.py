import logging
from typing import Iterable, List

from .datetime_utils import parse_date_key

logger = logging.getLogger(__name__)


def is_valid_habit_name(name: str) -> bool:
    return isinstance(name, str) and 1 <= len(name.strip()) <= 100


def is_valid_date(date_str: str) -> bool:
    try:
        parse_date_key(date_str)
    except (ValueError, TypeError):
        return False
    return True


def clean_date_keys(raw: Iterable, source: str = "") -> List[str]:
    """Оставляет только корректные ключи yyyy-MM-dd, без повторов, по возрастанию.

    Некорректные значения отбрасываются и логируются, а не доходят до аналитики.
    """
    valid = set()
    dropped = []
    for value in raw or ():
        if is_valid_date(value):
            valid.add(value)
        else:
            dropped.append(value)

    if dropped:
        logger.warning(f"⚠️ Отброшено некорректных дат {len(dropped)} ({source}): {dropped[:5]}")

    return sorted(valid)
