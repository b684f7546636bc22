#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitLens Dashboard - FastAPI Application
HTTP-интерфейс к хранилищу привычек и аналитическому движку
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..models import HabitNotFoundError, ValidationError
from ..services.habits_client import HabitsApiError
from ..shared.models import HealthCheck
from .api import habits, stats
from .config import settings
from .dependencies import (
    cleanup_resources,
    get_config,
    get_habits_client,
    init_analytics_engine,
    init_repository,
)

logger = logging.getLogger(__name__)

app_start_time = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    global app_start_time

    # Startup
    settings.setup_logging()
    logger.info(f"🚀 Запуск {settings.APP_NAME} v{__version__} ({settings.ENVIRONMENT})...")
    logger.info(f"⚙️ Конфигурация: {get_config().to_dict()}")
    app_start_time = time.time()

    repository = init_repository()
    init_analytics_engine()

    if settings.SYNC_ON_STARTUP:
        config = get_config()
        try:
            await repository.sync_from_api(
                get_habits_client(),
                settings.HABITS_USER_ID or config.client.user_id,
                config.analytics.enrich_concurrency,
            )
        except HabitsApiError as e:
            # Работаем с пустым хранилищем
            logger.error(f"❌ Не удалось загрузить привычки из API: {e}")

    logger.info(f"📊 Привычек в хранилище: {len(repository)}")
    logger.info(f"🌐 Dashboard доступен на: http://{settings.DASHBOARD_HOST}:{settings.DASHBOARD_PORT}")

    yield

    # Shutdown
    logger.info("🛑 Остановка Dashboard...")
    await cleanup_resources()


app = FastAPI(
    title="HabitLens Dashboard",
    description="Аналитика привычек: серии, помесячные срезы, сравнения и рейтинги",
    version=__version__,
    docs_url="/api/docs" if settings.DEBUG else None,
    redoc_url="/api/redoc" if settings.DEBUG else None,
    openapi_url="/api/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan,
)

# ===== MIDDLEWARE =====

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """Логирование запросов и время обработки"""
    start_time = time.time()
    client_ip = request.headers.get("X-Forwarded-For") or (request.client.host if request.client else "-")

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} "
        f"- {response.status_code} "
        f"- {process_time:.3f}s "
        f"- {client_ip}"
    )
    response.headers["X-Process-Time"] = str(process_time)
    return response


# ===== РОУТЕРЫ =====

app.include_router(habits.router)
app.include_router(stats.router)


# ===== СЛУЖЕБНЫЕ ENDPOINTS =====

@app.get("/health", response_model=HealthCheck)
async def health_check():
    """Проверка здоровья сервиса"""
    return HealthCheck(
        status="healthy",
        service="habitlens-dashboard",
        version=__version__,
        timestamp=time.time(),
        habits=len(init_repository()),
    )


@app.get("/ping")
async def ping():
    """Простой ping endpoint"""
    return {
        "message": "pong",
        "timestamp": time.time(),
        "uptime": time.time() - app_start_time,
    }


# ===== ОБРАБОТЧИКИ ОШИБОК =====

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "status_code": status.HTTP_400_BAD_REQUEST},
    )


@app.exception_handler(HabitNotFoundError)
async def not_found_handler(request: Request, exc: HabitNotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc), "status_code": status.HTTP_404_NOT_FOUND},
    )


@app.exception_handler(HabitsApiError)
async def upstream_error_handler(request: Request, exc: HabitsApiError):
    """Ошибки удалённого API отдаются как 502"""
    logger.error(f"❌ Ошибка API привычек: {exc} (status={exc.status})")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc), "status_code": status.HTTP_502_BAD_GATEWAY},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Некорректные параметры запроса отдаются как 400"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors()), "status_code": status.HTTP_400_BAD_REQUEST},
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Обработчик HTTP исключений"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "status_code": exc.status_code
        }
    )


# ===== ЗАПУСК ПРИЛОЖЕНИЯ =====

def create_app() -> FastAPI:
    """Фабрика для создания приложения"""
    return app


def run_dashboard(host: Optional[str] = None, port: Optional[int] = None, reload: bool = False):
    """Запуск дашборда"""
    host = host or settings.DASHBOARD_HOST
    port = port or settings.DASHBOARD_PORT

    logger.info(f"🌐 Запуск Dashboard на http://{host}:{port}")
    logger.info(f"🔄 Автоперезагрузка: {reload}")

    try:
        uvicorn.run(
            "habitlens.dashboard.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level="debug" if settings.DEBUG else "info",
            server_header=False,
        )
    except KeyboardInterrupt:
        logger.info("👋 Dashboard остановлен")
