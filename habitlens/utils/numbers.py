import math


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def round_half_up(value: float) -> int:
    # 2.5 -> 3, -2.5 -> -2
    return int(math.floor(value + 0.5))


def at_least_one(value):
    """Знаменатель не меньше 1"""
    return max(value, 1)
