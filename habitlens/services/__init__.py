from .enrichment import enrich_with_calendars, fetch_habits_with_history
from .habits_client import HabitsApiClient, HabitsApiError, HabitsApiTransientError
from .repository import HabitRepository

__all__ = [
    'enrich_with_calendars',
    'fetch_habits_with_history',
    'HabitsApiClient',
    'HabitsApiError',
    'HabitsApiTransientError',
    'HabitRepository',
]
