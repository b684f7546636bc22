#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitLens - Dashboard Configuration
Настройки HTTP-дашборда аналитики привычек
"""

import logging
from pathlib import Path
from typing import List, Optional

import pytz
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils.logger import setup_logger


class DashboardSettings(BaseSettings):
    """Настройки дашборда HabitLens"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===== ОСНОВНЫЕ НАСТРОЙКИ =====

    APP_NAME: str = Field(default="HabitLens Dashboard", description="Название приложения")
    ENVIRONMENT: str = Field(default="development", description="Среда выполнения")
    DEBUG: bool = Field(default=True, description="Режим отладки")

    # ===== СЕТЬ =====

    DASHBOARD_HOST: str = Field(default="0.0.0.0", description="Хост для запуска дашборда")
    DASHBOARD_PORT: int = Field(default=8000, description="Порт для запуска дашборда")
    ALLOWED_ORIGINS: List[str] = Field(default=["*"], description="Разрешенные источники для CORS")

    # ===== ЛОГИРОВАНИЕ =====

    LOGS_DIR: Path = Field(default=Path("logs"), description="Директория логов")
    LOG_TO_FILE: bool = Field(default=False, description="Писать лог в файл")
    LOG_LEVEL: str = Field(default="INFO", description="Уровень логирования")
    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Формат логов"
    )
    LOG_DATE_FORMAT: str = Field(default="%Y-%m-%d %H:%M:%S", description="Формат даты в логах")

    # ===== АНАЛИТИКА =====

    TIMEZONE: Optional[str] = Field(default=None, description="Зона для «сегодня»; по умолчанию ANALYTICS_TIMEZONE")

    # ===== ИСТОЧНИК ДАННЫХ =====

    SYNC_ON_STARTUP: bool = Field(default=False, description="Загрузить привычки из API при старте")
    HABITS_USER_ID: Optional[str] = Field(default=None, description="Пользователь для синхронизации")
    FORWARD_TOGGLES: bool = Field(default=False, description="Передавать отметки в удалённый API")

    # ===== ВАЛИДАТОРЫ =====

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v):
        allowed_envs = ['development', 'production', 'testing', 'staging']
        if v.lower() not in allowed_envs:
            raise ValueError(f"ENVIRONMENT must be one of {allowed_envs}")
        return v.lower()

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        allowed_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}")
        return v.upper()

    @field_validator('DASHBOARD_PORT')
    @classmethod
    def validate_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError("DASHBOARD_PORT must be between 1 and 65535")
        return v

    @field_validator('TIMEZONE')
    @classmethod
    def validate_timezone(cls, v):
        if v is not None and v not in pytz.all_timezones_set:
            raise ValueError(f"Unknown TIMEZONE: {v}")
        return v

    # ===== МЕТОДЫ =====

    def setup_logging(self) -> None:
        """Настройка логирования"""
        logging.basicConfig(
            level=getattr(logging, self.LOG_LEVEL),
            format=self.LOG_FORMAT,
            datefmt=self.LOG_DATE_FORMAT,
        )

        if self.LOG_TO_FILE:
            setup_logger(str(self.LOGS_DIR / "dashboard.log"), self.LOG_LEVEL)

        if not self.DEBUG:
            logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


settings = DashboardSettings()
