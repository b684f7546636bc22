#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitLens - Analytics Engine
Единая точка входа для всех аналитических срезов.

Движок не хранит состояние между вызовами: каждый метод получает
привычки и AnalysisOptions и возвращает новые объекты результата.
"""

import logging
import time
from datetime import date
from typing import Iterable, List, Optional

from ..models import (
    AnalysisOptions,
    AnalyticsReport,
    AtRiskHabit,
    CompareFocus,
    ConsistencyRow,
    DerivedHabitMetrics,
    Habit,
    HabitSummary,
    Heatmap,
    ListOptions,
    MonthBarView,
    MonthComparison,
    MonthlyRow,
    Momentum,
    OverviewView,
    ParetoResult,
    WeekdayDistribution,
)
from ..utils.datetime_utils import to_date_key
from . import comparison, distribution, habit_metrics, monthly, ranking

logger = logging.getLogger(__name__)


class AnalyticsEngine:
    """Аналитический движок привычек"""

    def __init__(self, heatmap_days: int = distribution.HEATMAP_DAYS,
                 consistency_days: int = ranking.CONSISTENCY_DAYS,
                 at_risk_days: int = ranking.AT_RISK_DAYS):
        self.heatmap_days = heatmap_days
        self.consistency_days = consistency_days
        self.at_risk_days = at_risk_days

    # ===== ПОКАЗАТЕЛИ ПРИВЫЧЕК =====

    def metrics(self, habits: Iterable[Habit], options: AnalysisOptions) -> List[DerivedHabitMetrics]:
        return habit_metrics.derive_all(options.select(habits), options.reference_date)

    def summary(self, habits: Iterable[Habit], options: AnalysisOptions) -> HabitSummary:
        return habit_metrics.habit_summary(self.metrics(habits, options), options.reference_date)

    def list_habits(self, habits: Iterable[Habit], options: AnalysisOptions,
                    list_options: Optional[ListOptions] = None) -> List[DerivedHabitMetrics]:
        return habit_metrics.list_habits(options.select(habits), options.reference_date, list_options)

    # ===== ПОМЕСЯЧНЫЕ СРЕЗЫ =====

    def monthly_rows(self, habits: Iterable[Habit], options: AnalysisOptions) -> List[MonthlyRow]:
        return monthly.build_monthly_rows(options.select(habits), options.reference_date,
                                          options.window_months)

    def month_bar(self, habits: Iterable[Habit], options: AnalysisOptions,
                  selected: Optional[date] = None, query: str = "") -> MonthBarView:
        habits = options.select(habits)
        rows = monthly.build_monthly_rows(habits, options.reference_date, options.window_months)
        return monthly.month_bar_view(habits, rows, selected or options.reference_date,
                                      options.reference_date, query)

    def overview(self, habits: Iterable[Habit], options: AnalysisOptions) -> OverviewView:
        habits = options.select(habits)
        rows = monthly.build_monthly_rows(habits, options.reference_date, options.window_months)
        return monthly.overview_view(habits, rows)

    # ===== РАСПРЕДЕЛЕНИЯ =====

    def weekday(self, habits: Iterable[Habit], options: AnalysisOptions) -> WeekdayDistribution:
        return distribution.weekday_distribution(options.select(habits), options.reference_date)

    def heatmap(self, habits: Iterable[Habit], options: AnalysisOptions) -> Heatmap:
        return distribution.completion_heatmap(options.select(habits), options.reference_date,
                                               self.heatmap_days)

    # ===== СРАВНЕНИЯ =====

    def compare(self, habits: Iterable[Habit], options: AnalysisOptions, month1: date, month2: date,
                focus: CompareFocus = CompareFocus.ALL, changed_only: bool = False) -> MonthComparison:
        return comparison.compare_months(options.select(habits), month1, month2, focus, changed_only)

    def momentum(self, habits: Iterable[Habit], options: AnalysisOptions) -> Momentum:
        return comparison.momentum(options.select(habits), options.reference_date)

    # ===== РЕЙТИНГИ =====

    def pareto(self, habits: Iterable[Habit], options: AnalysisOptions) -> ParetoResult:
        return ranking.pareto_for(options.select(habits), options.reference_date, options.window_months)

    def consistency(self, habits: Iterable[Habit], options: AnalysisOptions) -> List[ConsistencyRow]:
        return ranking.consistency(options.select(habits), options.reference_date, self.consistency_days)

    def at_risk(self, habits: Iterable[Habit], options: AnalysisOptions) -> List[AtRiskHabit]:
        found = ranking.at_risk(options.select(habits), options.reference_date, self.at_risk_days)
        return [AtRiskHabit(habit_id=h.id, name=h.name, last_date=h.last_date) for h in found]

    # ===== ПОЛНЫЙ ОТЧЁТ =====

    def build_report(self, habits: Iterable[Habit], options: AnalysisOptions) -> AnalyticsReport:
        """Все срезы за один проход; помесячные строки считаются один раз"""
        start_time = time.time()
        habits = options.select(habits)
        ref = options.reference_date

        metrics = habit_metrics.derive_all(habits, ref)
        rows = monthly.build_monthly_rows(habits, ref, options.window_months)
        found_at_risk = ranking.at_risk(habits, ref, self.at_risk_days)

        report = AnalyticsReport(
            reference_date=to_date_key(ref),
            summary=habit_metrics.habit_summary(metrics, ref),
            metrics=metrics,
            monthly=rows,
            overview=monthly.overview_view(habits, rows),
            weekday=distribution.weekday_distribution(habits, ref),
            heatmap=distribution.completion_heatmap(habits, ref, self.heatmap_days),
            momentum=comparison.momentum(habits, ref),
            pareto=ranking.pareto(habits, rows),
            consistency=ranking.consistency(habits, ref, self.consistency_days),
            at_risk=[AtRiskHabit(habit_id=h.id, name=h.name, last_date=h.last_date) for h in found_at_risk],
            has_completions=any(h.completed_dates for h in habits),
        )

        logger.debug(f"📊 Отчёт по {len(habits)} привычкам за {time.time() - start_time:.3f}s")
        return report
