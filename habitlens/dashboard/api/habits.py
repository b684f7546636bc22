import logging
from dataclasses import asdict
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from ...config import HabitLensConfig
from ...core.engine import AnalyticsEngine
from ...core.habit_metrics import derive_metrics, month_grid
from ...models import AnalysisOptions, HabitOrder, HabitTab, ListOptions
from ...services.habits_client import HabitsApiClient
from ...services.repository import HabitRepository
from ...shared.models import HabitCreate, HabitOut, HabitUpdate, SyncResult, ToggleRequest
from ..dependencies import (
    get_analysis_options,
    get_analytics_engine,
    get_config,
    get_habits_client,
    get_reference_date,
    get_repository,
    parse_month_param,
)
from ..config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/habits", tags=["habits"])


def _habit_out(habit) -> HabitOut:
    return HabitOut(
        id=habit.id,
        name=habit.name,
        completed_dates=sorted(habit.completed_dates),
        created_at=habit.created_at,
    )


@router.get("/", response_model=List[Dict[str, Any]])
async def list_habits(
    query: str = Query("", description="Поиск по названию"),
    tab: HabitTab = Query(HabitTab.ALL),
    order: HabitOrder = Query(HabitOrder.STREAK),
    options: AnalysisOptions = Depends(get_analysis_options),
    repository: HabitRepository = Depends(get_repository),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    """
    Список привычек с показателями, поиском, вкладкой и сортировкой
    """
    list_options = ListOptions(query=query, tab=tab, order_by=order)
    return [m.to_dict() for m in engine.list_habits(repository.list(), options, list_options)]


@router.post("/", response_model=HabitOut, status_code=status.HTTP_201_CREATED)
async def create_habit(
    payload: HabitCreate,
    repository: HabitRepository = Depends(get_repository),
):
    return _habit_out(repository.create(payload.name, payload.completed_dates))


@router.post("/sync", response_model=SyncResult)
async def sync_habits(
    repository: HabitRepository = Depends(get_repository),
    client: HabitsApiClient = Depends(get_habits_client),
    config: HabitLensConfig = Depends(get_config),
):
    """
    Загрузить привычки и историю выполнений из удалённого API
    """
    synced = await repository.sync_from_api(
        client, config.client.user_id, config.analytics.enrich_concurrency
    )
    return SyncResult(synced=synced, source=config.client.base_url)


@router.get("/{habit_id}", response_model=Dict[str, Any])
async def get_habit(
    habit_id: str,
    reference_date: date = Depends(get_reference_date),
    repository: HabitRepository = Depends(get_repository),
):
    habit = repository.get(habit_id)
    return {
        "habit": _habit_out(habit).model_dump(),
        "metrics": derive_metrics(habit, reference_date).to_dict(),
    }


@router.patch("/{habit_id}", response_model=HabitOut)
async def update_habit(
    habit_id: str,
    payload: HabitUpdate,
    repository: HabitRepository = Depends(get_repository),
):
    return _habit_out(repository.update(habit_id, payload.name))


@router.delete("/{habit_id}", response_model=Dict[str, Any])
async def delete_habit(
    habit_id: str,
    repository: HabitRepository = Depends(get_repository),
):
    repository.delete(habit_id)
    return {"deleted": habit_id}


@router.post("/{habit_id}/toggle", response_model=Dict[str, Any])
async def toggle_habit(
    habit_id: str,
    payload: Optional[ToggleRequest] = None,
    reference_date: date = Depends(get_reference_date),
    repository: HabitRepository = Depends(get_repository),
    client: HabitsApiClient = Depends(get_habits_client),
):
    """
    Отметить или снять выполнение; без тела запроса используется дата отсчёта

    При FORWARD_TOGGLES отметка сначала уходит в удалённый API, а локальная
    история заменяется его ответом.
    """
    date_key = payload.date if payload else reference_date.isoformat()

    if settings.FORWARD_TOGGLES:
        repository.get(habit_id)
        data = await client.toggle_on_date(habit_id, date_key)
        dates = data.get("completedDates") if isinstance(data, dict) else None
        if isinstance(dates, list):
            habit = repository.set_dates(habit_id, dates)
        else:
            logger.warning(f"⚠️ API не вернул completedDates для {habit_id}, отметка применена локально")
            habit = repository.toggle_on_date(habit_id, date_key)
    else:
        habit = repository.toggle_on_date(habit_id, date_key)
    return {
        "habit": _habit_out(habit).model_dump(),
        "date": date_key,
        "done": date_key in habit.completed_dates,
        "metrics": derive_metrics(habit, reference_date).to_dict(),
    }


@router.get("/{habit_id}/calendar", response_model=Dict[str, Any])
async def get_habit_calendar(
    habit_id: str,
    repository: HabitRepository = Depends(get_repository),
):
    habit = repository.get(habit_id)
    return {"id": habit.id, "completedDates": sorted(habit.completed_dates)}


@router.get("/{habit_id}/month-grid", response_model=Dict[str, Any])
async def get_month_grid(
    habit_id: str,
    month: Optional[str] = Query(None, description="Месяц yyyy-MM"),
    reference_date: date = Depends(get_reference_date),
    repository: HabitRepository = Depends(get_repository),
):
    """
    Календарная сетка привычки на месяц
    """
    habit = repository.get(habit_id)
    first = parse_month_param(month, "month") if month else reference_date.replace(day=1)
    return asdict(month_grid(habit, first.year, first.month - 1, reference_date))
