from habitlens.core.distribution import HEATMAP_DAYS, completion_heatmap, weekday_distribution
from habitlens.models import WEEKDAY_LABELS

from .conftest import REF, make_habit


def test_heatmap_without_habits():
    heatmap = completion_heatmap([], REF)
    assert len(heatmap.cells) == HEATMAP_DAYS == 28
    assert heatmap.cells[0].date_key == "2025-09-18"
    assert heatmap.cells[-1].date_key == "2025-10-15"
    assert all(c.count == 0 and c.intensity == 0 for c in heatmap.cells)
    assert heatmap.max_count == 1


def test_heatmap_counts_habits_per_day():
    habits = [
        make_habit(1, "Читать", ["2025-10-15", "2025-10-14", "2025-09-17"]),
        make_habit(2, "Бег", ["2025-10-15"]),
    ]
    heatmap = completion_heatmap(habits, REF)
    by_key = {c.date_key: c for c in heatmap.cells}

    assert "2025-09-17" not in by_key
    assert by_key["2025-10-15"].count == 2
    assert by_key["2025-10-15"].intensity == 1.0
    assert by_key["2025-10-14"].intensity == 0.5
    assert heatmap.max_count == 2


def test_weekday_distribution_window_and_buckets():
    habits = [
        # 12 и 19 октября — воскресенья, 13-е — понедельник
        make_habit(1, "Читать", ["2025-10-12", "2025-10-13", "2025-10-19"]),
        # 30 апреля за пределами окна, 1 мая (четверг) внутри
        make_habit(2, "Бег", ["2025-04-30", "2025-05-01", "2025-11-02"]),
    ]
    dist = weekday_distribution(habits, REF)

    assert dist.start_key == "2025-05-01"
    assert dist.end_key == "2025-10-31"
    assert dist.counts == [2, 1, 0, 0, 1, 0, 0]
    assert dist.labels == WEEKDAY_LABELS
    assert dist.max_count == 2
    assert dist.best_index == 0
    assert dist.worst_index == 2


def test_weekday_distribution_empty():
    dist = weekday_distribution([], REF)
    assert dist.counts == [0] * 7
    assert dist.max_count == 1
    assert dist.best_index == 0
    assert dist.worst_index == 0
