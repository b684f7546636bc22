#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitLens - Configuration
Конфигурация клиента API привычек и аналитики из переменных окружения
"""

import os
from typing import Optional, Dict, Any
from dataclasses import dataclass
from enum import Enum

import pytz


class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


@dataclass
class ClientConfig:
    """Конфигурация клиента удалённого API привычек"""
    base_url: str = "http://localhost:3000"
    token: Optional[str] = None
    timeout_seconds: float = 15.0
    retries: int = 1
    user_id: Optional[str] = None


@dataclass
class AnalyticsConfig:
    """Конфигурация аналитики"""
    window_months: int = 6
    heatmap_days: int = 28
    consistency_days: int = 30
    at_risk_days: int = 14
    enrich_concurrency: int = 4
    timezone: str = "UTC"


class HabitLensConfig:
    """Главный класс конфигурации"""

    def __init__(self):
        self.environment = Environment(os.getenv('ENVIRONMENT', 'development').lower())
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""

        self.client = ClientConfig(
            base_url=os.getenv('HABITS_API_BASE_URL', 'http://localhost:3000').rstrip('/'),
            token=os.getenv('HABITS_API_TOKEN') or None,
            timeout_seconds=float(os.getenv('HABITS_API_TIMEOUT', 15)),
            retries=int(os.getenv('HABITS_API_RETRIES', 1)),
            user_id=os.getenv('HABITS_USER_ID') or None,
        )

        self.analytics = AnalyticsConfig(
            window_months=int(os.getenv('ANALYTICS_WINDOW_MONTHS', 6)),
            heatmap_days=int(os.getenv('HEATMAP_DAYS', 28)),
            consistency_days=int(os.getenv('CONSISTENCY_DAYS', 30)),
            at_risk_days=int(os.getenv('AT_RISK_DAYS', 14)),
            enrich_concurrency=int(os.getenv('ENRICH_CONCURRENCY', 4)),
            timezone=os.getenv('ANALYTICS_TIMEZONE', 'UTC'),
        )

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = []

        if not self.client.base_url.startswith(('http://', 'https://')):
            errors.append("HABITS_API_BASE_URL должен начинаться с http:// или https://")

        if self.client.timeout_seconds <= 0:
            errors.append("HABITS_API_TIMEOUT должен быть положительным")

        if self.client.retries < 1:
            errors.append("HABITS_API_RETRIES должен быть не меньше 1")

        for name in ('window_months', 'heatmap_days', 'consistency_days', 'at_risk_days', 'enrich_concurrency'):
            if getattr(self.analytics, name) < 1:
                errors.append(f"{name} должен быть положительным числом")

        if self.analytics.timezone not in pytz.all_timezones_set:
            errors.append(f"Неизвестная временная зона: {self.analytics.timezone}")

        if errors:
            raise ValueError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация конфигурации (токен скрыт)"""
        return {
            'environment': self.environment.value,
            'client': {
                'base_url': self.client.base_url,
                'token': (self.client.token[:4] + "...") if self.client.token else None,
                'timeout_seconds': self.client.timeout_seconds,
                'retries': self.client.retries,
            },
            'analytics': {
                'window_months': self.analytics.window_months,
                'heatmap_days': self.analytics.heatmap_days,
                'consistency_days': self.analytics.consistency_days,
                'at_risk_days': self.analytics.at_risk_days,
                'enrich_concurrency': self.analytics.enrich_concurrency,
                'timezone': self.analytics.timezone,
            },
        }


def load_config() -> HabitLensConfig:
    return HabitLensConfig()


__all__ = [
    'HabitLensConfig',
    'ClientConfig',
    'AnalyticsConfig',
    'Environment',
    'load_config',
]
