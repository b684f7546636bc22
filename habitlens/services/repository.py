# services/repository.py

import logging
import threading
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Optional

from ..models import Habit, HabitNotFoundError, ValidationError
from ..utils.datetime_utils import to_date_key
from ..utils.validators import clean_date_keys, is_valid_date, is_valid_habit_name
from .enrichment import fetch_habits_with_history

logger = logging.getLogger(__name__)


class HabitRepository:
    """
    Хранилище привычек в памяти

    Передаётся в дашборд как зависимость, а не живёт глобальной переменной.
    Все возвращаемые привычки неизменяемы.
    """

    def __init__(self, habits: Optional[Iterable[Habit]] = None):
        self._lock = threading.RLock()
        self._habits: Dict[str, Habit] = {}
        if habits:
            self.replace_all(habits)

    def __len__(self) -> int:
        return len(self._habits)

    # ===== ЧТЕНИЕ =====

    def list(self) -> List[Habit]:
        """Привычки в порядке добавления"""
        with self._lock:
            return list(self._habits.values())

    def get(self, habit_id: str) -> Habit:
        with self._lock:
            habit = self._habits.get(str(habit_id))
        if habit is None:
            raise HabitNotFoundError(f"Привычка {habit_id} не найдена")
        return habit

    # ===== ИЗМЕНЕНИЕ =====

    def _next_id(self) -> str:
        nums = [int(k) for k in self._habits if k.isdigit()]
        return str(max(nums) + 1 if nums else 1)

    def create(self, name: str, completed_dates: Iterable[str] = ()) -> Habit:
        if not is_valid_habit_name(name):
            raise ValidationError("Название привычки должно быть от 1 до 100 символов")

        with self._lock:
            habit = Habit(
                id=self._next_id(),
                name=name.strip(),
                completed_dates=frozenset(clean_date_keys(completed_dates, source="create")),
                created_at=datetime.now(timezone.utc).replace(microsecond=0).isoformat(),
            )
            self._habits[habit.id] = habit

        logger.info(f"✅ Создана привычка {habit.id}: {habit.name}")
        return habit

    def update(self, habit_id: str, name: Optional[str] = None) -> Habit:
        if name is not None and not is_valid_habit_name(name):
            raise ValidationError("Название привычки должно быть от 1 до 100 символов")

        with self._lock:
            habit = self.get(habit_id)
            if name is not None:
                habit = replace(habit, name=name.strip())
            self._habits[habit.id] = habit
        return habit

    def delete(self, habit_id: str) -> None:
        with self._lock:
            self.get(habit_id)
            del self._habits[str(habit_id)]
        logger.info(f"🗑 Удалена привычка {habit_id}")

    def replace_all(self, habits: Iterable[Habit]) -> None:
        with self._lock:
            self._habits = {h.id: h for h in habits}

    # ===== ВЫПОЛНЕНИЯ =====

    def toggle_on_date(self, habit_id: str, date_key: str) -> Habit:
        """Отметить или снять выполнение за день"""
        if not is_valid_date(date_key):
            raise ValidationError(f"Некорректная дата: {date_key!r}")

        with self._lock:
            habit = self.get(habit_id)
            if date_key in habit.completed_dates:
                habit = habit.with_dates(habit.completed_dates - {date_key})
            else:
                habit = habit.with_dates(habit.completed_dates | {date_key})
            self._habits[habit.id] = habit
        return habit

    def set_dates(self, habit_id: str, dates: Iterable[str]) -> Habit:
        """Заменить историю выполнений (ответ удалённого API)"""
        with self._lock:
            habit = self.get(habit_id)
            habit = habit.with_dates(clean_date_keys(dates, source=f"habit {habit_id}"))
            self._habits[habit.id] = habit
        return habit

    def complete_on(self, habit_id: str, day: date) -> Habit:
        """Отметить выполнение; повторная отметка ничего не меняет"""
        key = to_date_key(day)
        with self._lock:
            habit = self.get(habit_id)
            if key not in habit.completed_dates:
                habit = self.toggle_on_date(habit_id, key)
        return habit

    def undo_on(self, habit_id: str, day: date) -> Habit:
        key = to_date_key(day)
        with self._lock:
            habit = self.get(habit_id)
            if key in habit.completed_dates:
                habit = self.toggle_on_date(habit_id, key)
        return habit

    # ===== СИНХРОНИЗАЦИЯ =====

    async def sync_from_api(self, client, user_id: Optional[str] = None, concurrency: int = 4) -> int:
        """Заменить содержимое данными удалённого API"""
        habits = await fetch_habits_with_history(client, user_id, concurrency)
        self.replace_all(habits)
        logger.info(f"🔄 Синхронизировано привычек: {len(habits)}")
        return len(habits)
