"""
HabitLens - Models Package
Модели привычек и результатов аналитики
"""

from .enums import (
    HabitTab,
    HabitOrder,
    CompareFocus,
    MONTH_SHORT,
    MONTH_NAMES,
    WEEKDAY_LABELS,
)

from .habit import (
    Habit,
    HabitLensError,
    ValidationError,
    HabitNotFoundError,
)

from .analytics import (
    AnalysisOptions,
    ListOptions,
    DerivedHabitMetrics,
    HabitSummary,
    CalendarDay,
    MonthGrid,
    HabitMonthCount,
    MonthlyRow,
    MonthTotal,
    MonthBarView,
    TrendPoint,
    TrendLine,
    OverviewView,
    WeekdayDistribution,
    HeatmapCell,
    Heatmap,
    ComparisonRow,
    MonthComparison,
    Momentum,
    ParetoRow,
    ParetoResult,
    ConsistencyRow,
    AtRiskHabit,
    AnalyticsReport,
)

__all__ = [
    # Enums
    'HabitTab',
    'HabitOrder',
    'CompareFocus',
    'MONTH_SHORT',
    'MONTH_NAMES',
    'WEEKDAY_LABELS',

    # Habit
    'Habit',
    'HabitLensError',
    'ValidationError',
    'HabitNotFoundError',

    # Analytics results
    'AnalysisOptions',
    'ListOptions',
    'DerivedHabitMetrics',
    'HabitSummary',
    'CalendarDay',
    'MonthGrid',
    'HabitMonthCount',
    'MonthlyRow',
    'MonthTotal',
    'MonthBarView',
    'TrendPoint',
    'TrendLine',
    'OverviewView',
    'WeekdayDistribution',
    'HeatmapCell',
    'Heatmap',
    'ComparisonRow',
    'MonthComparison',
    'Momentum',
    'ParetoRow',
    'ParetoResult',
    'ConsistencyRow',
    'AtRiskHabit',
    'AnalyticsReport',
]
