# models/habit.py

from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Iterable, Optional

from ..utils.validators import clean_date_keys


class HabitLensError(Exception):
    """Базовая ошибка пакета"""
    pass


class ValidationError(HabitLensError):
    """Ошибка валидации входных данных"""
    pass


class HabitNotFoundError(HabitLensError):
    """Привычка не найдена"""
    pass


@dataclass(frozen=True)
class Habit:
    id: str
    name: str
    completed_dates: FrozenSet[str] = field(default_factory=frozenset)  # ключи yyyy-MM-dd
    created_at: Optional[str] = None  # ISO, только для информации

    @property
    def last_date(self) -> Optional[str]:
        return max(self.completed_dates) if self.completed_dates else None

    def with_dates(self, dates: Iterable[str]) -> "Habit":
        return replace(self, completed_dates=frozenset(dates))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "completedDates": sorted(self.completed_dates),
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Habit":
        """Создание из словаря API; некорректные даты отбрасываются."""
        if "id" not in data:
            raise ValidationError("У привычки нет id")
        habit_id = str(data["id"])
        dates = data.get("completedDates", data.get("completed_dates")) or []
        return cls(
            id=habit_id,
            name=str(data.get("name", "")),
            completed_dates=frozenset(clean_date_keys(dates, source=f"habit {habit_id}")),
            created_at=data.get("createdAt", data.get("created_at")),
        )
