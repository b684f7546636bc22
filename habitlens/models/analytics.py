# models/analytics.py
# Результаты аналитики: создаются заново при каждом запросе и не хранятся.

from dataclasses import dataclass, field, asdict
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from .enums import HabitOrder, HabitTab
from .habit import Habit


@dataclass
class AnalysisOptions:
    """Явная конфигурация одного вызова аналитики"""
    reference_date: date
    window_months: int = 6
    habit_filter: Optional[str] = None  # подстрока имени, без учёта регистра

    def select(self, habits: Iterable[Habit]) -> List[Habit]:
        habits = list(habits)
        q = (self.habit_filter or "").strip().lower()
        if not q:
            return habits
        return [h for h in habits if q in h.name.lower()]


@dataclass
class ListOptions:
    query: str = ""
    tab: HabitTab = HabitTab.ALL
    order_by: HabitOrder = HabitOrder.STREAK


@dataclass
class DerivedHabitMetrics:
    habit_id: str
    name: str
    streak: int = 0
    month_count: int = 0
    month_progress_pct: float = 0.0  # 0..1
    due_today: bool = True
    last_date: Optional[str] = None  # None = ещё не выполнялась
    total: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class HabitSummary:
    active: int = 0
    due_today: int = 0
    month_total: int = 0
    done_today: int = 0


@dataclass
class CalendarDay:
    day: int
    date_key: str
    done: bool
    is_today: bool


@dataclass
class MonthGrid:
    habit_id: str
    year: int
    month_index: int
    title: str  # «Октябрь 2025»
    leading_pads: int  # дни до 1-го числа, 0 = воскресенье
    days_in_month: int
    month_count: int
    progress_pct: float
    days: List[CalendarDay] = field(default_factory=list)


@dataclass
class HabitMonthCount:
    habit_id: str
    name: str
    completions: int


@dataclass
class MonthlyRow:
    year: int
    month_index: int  # 0..11
    month_key: str
    label: str
    per_habit: Dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.per_habit.values())


@dataclass
class MonthTotal:
    month_key: str
    label: str
    total: int


@dataclass
class MonthBarView:
    year: int
    month_index: int
    label: str
    habits: List[HabitMonthCount] = field(default_factory=list)
    max_completions: int = 1
    can_go_next: bool = False


@dataclass
class TrendPoint:
    month_key: str
    label: str
    completions: int


@dataclass
class TrendLine:
    habit_id: str
    name: str
    total: int
    max_value: int
    points: List[TrendPoint] = field(default_factory=list)


@dataclass
class OverviewView:
    totals: List[MonthTotal] = field(default_factory=list)
    max_total: int = 1
    top: List[HabitMonthCount] = field(default_factory=list)
    bottom: List[HabitMonthCount] = field(default_factory=list)
    lines: List[TrendLine] = field(default_factory=list)


@dataclass
class WeekdayDistribution:
    counts: List[int]
    labels: List[str]
    start_key: str
    end_key: str
    max_count: int = 1
    best_index: int = 0
    worst_index: int = 0


@dataclass
class HeatmapCell:
    date_key: str
    count: int
    intensity: float = 0.0


@dataclass
class Heatmap:
    cells: List[HeatmapCell] = field(default_factory=list)
    max_count: int = 1


@dataclass
class ComparisonRow:
    habit_id: str
    name: str
    count_month1: int
    count_month2: int
    diff: int


@dataclass
class MonthComparison:
    month1_key: str
    month2_key: str
    label1: str
    label2: str
    rows: List[ComparisonRow] = field(default_factory=list)
    top_gains: List[ComparisonRow] = field(default_factory=list)
    top_losses: List[ComparisonRow] = field(default_factory=list)
    total_month1: int = 0
    total_month2: int = 0
    total_diff: int = 0
    total_pct: int = 0
    max_value: int = 1


@dataclass
class Momentum:
    previous_key: str
    current_key: str
    rows: List[ComparisonRow] = field(default_factory=list)
    gainers: List[ComparisonRow] = field(default_factory=list)
    decliners: List[ComparisonRow] = field(default_factory=list)


@dataclass
class ParetoRow:
    habit_id: str
    name: str
    total: int
    share_pct: float
    cumulative_pct: float
    rank: int


@dataclass
class ParetoResult:
    rows: List[ParetoRow] = field(default_factory=list)
    grand_total: int = 1
    idx80: int = 0
    habits_for_80: int = 0


@dataclass
class ConsistencyRow:
    habit_id: str
    name: str
    done: int
    pct: int


@dataclass
class AtRiskHabit:
    habit_id: str
    name: str
    last_date: Optional[str] = None


@dataclass
class AnalyticsReport:
    reference_date: str
    summary: HabitSummary
    metrics: List[DerivedHabitMetrics]
    monthly: List[MonthlyRow]
    overview: OverviewView
    weekday: WeekdayDistribution
    heatmap: Heatmap
    momentum: Momentum
    pareto: ParetoResult
    consistency: List[ConsistencyRow]
    at_risk: List[AtRiskHabit]
    has_completions: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
