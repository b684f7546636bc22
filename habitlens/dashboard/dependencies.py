#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitLens - Dashboard Dependencies
Провайдеры зависимостей для FastAPI приложения
"""

import logging
from datetime import date
from functools import lru_cache
from typing import Optional

from fastapi import HTTPException, Query, status

from ..config import load_config
from ..core.engine import AnalyticsEngine
from ..models import AnalysisOptions
from ..services.habits_client import HabitsApiClient
from ..services.repository import HabitRepository
from ..utils.datetime_utils import parse_date_key, today
from .config import settings

logger = logging.getLogger(__name__)

# ===== ГЛОБАЛЬНЫЕ КОМПОНЕНТЫ =====

_repository: Optional[HabitRepository] = None
_analytics_engine: Optional[AnalyticsEngine] = None
_habits_client: Optional[HabitsApiClient] = None


def init_repository() -> HabitRepository:
    global _repository

    if _repository is None:
        logger.info("🔄 Инициализация HabitRepository...")
        _repository = HabitRepository()
    return _repository


def init_analytics_engine() -> AnalyticsEngine:
    global _analytics_engine

    if _analytics_engine is None:
        analytics = get_config().analytics
        _analytics_engine = AnalyticsEngine(
            heatmap_days=analytics.heatmap_days,
            consistency_days=analytics.consistency_days,
            at_risk_days=analytics.at_risk_days,
        )
        logger.info("✅ AnalyticsEngine инициализирован")
    return _analytics_engine


# ===== ПРОВАЙДЕРЫ =====

@lru_cache()
def get_config():
    return load_config()


def get_repository() -> HabitRepository:
    return _repository or init_repository()


def get_analytics_engine() -> AnalyticsEngine:
    return _analytics_engine or init_analytics_engine()


def get_habits_client() -> HabitsApiClient:
    global _habits_client

    if _habits_client is None:
        _habits_client = HabitsApiClient(get_config().client)
    return _habits_client


def parse_day_param(value: str, name: str) -> date:
    try:
        return parse_date_key(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Параметр {name} должен быть датой yyyy-MM-dd"
        )


def parse_month_param(value: str, name: str) -> date:
    """Месяц в виде yyyy-MM или полной даты; возвращает 1-е число"""
    day = parse_day_param(value + "-01" if len(value) == 7 else value, name)
    return day.replace(day=1)


def get_reference_date(
    today_param: Optional[str] = Query(None, alias="today", description="Дата отсчёта yyyy-MM-dd")
) -> date:
    """Дата отсчёта из запроса или «сегодня» в настроенной зоне"""
    if today_param:
        return parse_day_param(today_param, "today")
    return today(settings.TIMEZONE or get_config().analytics.timezone)


def get_analysis_options(
    today_param: Optional[str] = Query(None, alias="today"),
    habit_filter: Optional[str] = Query(None, alias="filter", description="Подстрока имени привычки"),
) -> AnalysisOptions:
    return AnalysisOptions(
        reference_date=get_reference_date(today_param),
        window_months=get_config().analytics.window_months,
        habit_filter=habit_filter,
    )


# ===== ОЧИСТКА РЕСУРСОВ =====

async def cleanup_resources():
    """Очистка ресурсов при остановке приложения"""
    global _habits_client

    logger.info("🧹 Очистка ресурсов...")
    if _habits_client is not None:
        await _habits_client.close()
        _habits_client = None
    logger.info("✅ Ресурсы очищены")
