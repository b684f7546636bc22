"""
HabitLens - аналитика привычек

Чистые функции над неизменяемыми привычками: серии, помесячные срезы,
распределения, сравнения месяцев и рейтинги.
"""

__version__ = "1.0.0"

from .core import AnalyticsEngine
from .models import AnalysisOptions, Habit

__all__ = ['__version__', 'AnalyticsEngine', 'AnalysisOptions', 'Habit']
