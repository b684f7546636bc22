"""
HabitLens - Dashboard Package
HTTP-дашборд аналитики привычек на FastAPI
"""

from .config import settings, DashboardSettings

__all__ = ['settings', 'DashboardSettings']
