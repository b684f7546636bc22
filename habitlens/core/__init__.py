from .engine import AnalyticsEngine
from .habit_metrics import compute_streak, derive_metrics, list_habits, habit_summary, month_grid
from .monthly import build_monthly_rows, six_month_totals, month_bar_view, overview_view
from .distribution import weekday_distribution, completion_heatmap
from .comparison import pct_change, compare_months, momentum
from .ranking import pareto, consistency, at_risk

__all__ = [
    'AnalyticsEngine',
    'compute_streak',
    'derive_metrics',
    'list_habits',
    'habit_summary',
    'month_grid',
    'build_monthly_rows',
    'six_month_totals',
    'month_bar_view',
    'overview_view',
    'weekday_distribution',
    'completion_heatmap',
    'pct_change',
    'compare_months',
    'momentum',
    'pareto',
    'consistency',
    'at_risk',
]
