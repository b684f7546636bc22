from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from ...core.engine import AnalyticsEngine
from ...models import AnalysisOptions, CompareFocus, MonthlyRow
from ...services.repository import HabitRepository
from ...utils.datetime_utils import add_months, first_of_month
from ..dependencies import (
    get_analysis_options,
    get_analytics_engine,
    get_repository,
    parse_month_param,
)

router = APIRouter(prefix="/api/stats", tags=["statistics"])


def _row_to_dict(row: MonthlyRow) -> Dict[str, Any]:
    data = asdict(row)
    data["total"] = row.total
    return data


@router.get("/summary", response_model=Dict[str, Any])
async def get_summary(
    options: AnalysisOptions = Depends(get_analysis_options),
    repository: HabitRepository = Depends(get_repository),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    """
    KPI для шапки: активные привычки, на сегодня, за месяц, сделано сегодня
    """
    return asdict(engine.summary(repository.list(), options))


@router.get("/metrics", response_model=List[Dict[str, Any]])
async def get_metrics(
    options: AnalysisOptions = Depends(get_analysis_options),
    repository: HabitRepository = Depends(get_repository),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    return [m.to_dict() for m in engine.metrics(repository.list(), options)]


@router.get("/monthly", response_model=List[Dict[str, Any]])
async def get_monthly(
    options: AnalysisOptions = Depends(get_analysis_options),
    repository: HabitRepository = Depends(get_repository),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    """
    Выполнения по месяцам окна, от старого к новому
    """
    return [_row_to_dict(r) for r in engine.monthly_rows(repository.list(), options)]


@router.get("/month-bar", response_model=Dict[str, Any])
async def get_month_bar(
    month: Optional[str] = Query(None, description="Месяц yyyy-MM"),
    query: str = Query("", description="Поиск по названию"),
    options: AnalysisOptions = Depends(get_analysis_options),
    repository: HabitRepository = Depends(get_repository),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    selected = parse_month_param(month, "month") if month else None
    return asdict(engine.month_bar(repository.list(), options, selected, query))


@router.get("/overview", response_model=Dict[str, Any])
async def get_overview(
    options: AnalysisOptions = Depends(get_analysis_options),
    repository: HabitRepository = Depends(get_repository),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    """
    Итоги по месяцам, лучшие и худшие привычки, тренды
    """
    return asdict(engine.overview(repository.list(), options))


@router.get("/weekday", response_model=Dict[str, Any])
async def get_weekday(
    options: AnalysisOptions = Depends(get_analysis_options),
    repository: HabitRepository = Depends(get_repository),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    return asdict(engine.weekday(repository.list(), options))


@router.get("/heatmap", response_model=Dict[str, Any])
async def get_heatmap(
    options: AnalysisOptions = Depends(get_analysis_options),
    repository: HabitRepository = Depends(get_repository),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    return asdict(engine.heatmap(repository.list(), options))


@router.get("/compare", response_model=Dict[str, Any])
async def get_compare(
    month1: Optional[str] = Query(None, description="Базовый месяц yyyy-MM"),
    month2: Optional[str] = Query(None, description="Сравниваемый месяц yyyy-MM"),
    focus: CompareFocus = Query(CompareFocus.ALL),
    changed_only: bool = Query(False),
    options: AnalysisOptions = Depends(get_analysis_options),
    repository: HabitRepository = Depends(get_repository),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    """
    Сравнение двух месяцев; по умолчанию предыдущий против текущего
    """
    current = first_of_month(options.reference_date)
    m1 = parse_month_param(month1, "month1") if month1 else add_months(current, -1)
    m2 = parse_month_param(month2, "month2") if month2 else current
    return asdict(engine.compare(repository.list(), options, m1, m2, focus, changed_only))


@router.get("/momentum", response_model=Dict[str, Any])
async def get_momentum(
    options: AnalysisOptions = Depends(get_analysis_options),
    repository: HabitRepository = Depends(get_repository),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    return asdict(engine.momentum(repository.list(), options))


@router.get("/pareto", response_model=Dict[str, Any])
async def get_pareto(
    options: AnalysisOptions = Depends(get_analysis_options),
    repository: HabitRepository = Depends(get_repository),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    """
    Концентрация выполнений: сколько привычек дают 80% результата
    """
    return asdict(engine.pareto(repository.list(), options))


@router.get("/consistency", response_model=List[Dict[str, Any]])
async def get_consistency(
    options: AnalysisOptions = Depends(get_analysis_options),
    repository: HabitRepository = Depends(get_repository),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    return [asdict(r) for r in engine.consistency(repository.list(), options)]


@router.get("/at-risk", response_model=List[Dict[str, Any]])
async def get_at_risk(
    options: AnalysisOptions = Depends(get_analysis_options),
    repository: HabitRepository = Depends(get_repository),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    return [asdict(h) for h in engine.at_risk(repository.list(), options)]


@router.get("/report", response_model=Dict[str, Any])
async def get_report(
    options: AnalysisOptions = Depends(get_analysis_options),
    repository: HabitRepository = Depends(get_repository),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    """
    Все аналитические срезы одним ответом
    """
    report = engine.build_report(repository.list(), options)
    data = report.to_dict()
    data["monthly"] = [_row_to_dict(r) for r in report.monthly]
    return data
