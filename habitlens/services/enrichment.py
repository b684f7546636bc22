# services/enrichment.py

import asyncio
import itertools
import logging
import time
from dataclasses import replace
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from ..models import Habit
from ..utils.validators import clean_date_keys

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 4

CalendarFetcher = Callable[[str], Awaitable[Dict[str, Any]]]


def apply_calendar(habit: Habit, payload: Dict[str, Any]) -> Habit:
    """Привычка с историей из ответа календаря; некорректные даты отбрасываются"""
    dates = clean_date_keys(payload.get("completedDates") or [], source=f"habit {habit.id}")
    return replace(habit, completed_dates=frozenset(dates), created_at=payload.get("createdAt"))


def empty_history(habit: Habit) -> Habit:
    return replace(habit, completed_dates=frozenset(), created_at=None)


async def enrich_with_calendars(base: Sequence[Habit], fetch_calendar: CalendarFetcher,
                                concurrency: int = DEFAULT_CONCURRENCY) -> List[Habit]:
    """
    Загрузка истории выполнений для каждой привычки

    Фиксированное число воркеров берёт индексы из общего курсора, каждый
    пишет только в свою ячейку результата. Ошибка по одной привычке даёт
    пустую историю и не останавливает остальных. Возврат — после
    завершения всех воркеров, порядок совпадает с входным.
    """
    if not base:
        return []

    start_time = time.time()
    out: List[Optional[Habit]] = [None] * len(base)
    cursor = itertools.count()
    failures = 0

    async def worker():
        nonlocal failures
        while True:
            i = next(cursor)
            if i >= len(base):
                break
            habit = base[i]
            try:
                payload = await fetch_calendar(habit.id)
                out[i] = apply_calendar(habit, payload)
            except Exception as e:
                failures += 1
                logger.warning(f"⚠️ Не удалось загрузить календарь привычки {habit.id}: {e}")
                out[i] = empty_history(habit)

    workers = max(1, min(concurrency, len(base)))
    await asyncio.gather(*(worker() for _ in range(workers)))

    logger.info(
        f"📂 Загружены календари {len(base)} привычек "
        f"({workers} воркеров, ошибок: {failures}) за {time.time() - start_time:.2f}s"
    )
    return out


async def fetch_habits_with_history(client, user_id: Optional[str] = None,
                                    concurrency: int = DEFAULT_CONCURRENCY) -> List[Habit]:
    """Список привычек и их календари одним пакетом"""
    base = await client.list_habits(user_id)
    return await enrich_with_calendars(base, client.get_habit_calendar, concurrency)
