"""Numeric clamps that define the edges of the battle rules."""
from __future__ import annotations

MAX_REDUCTION = 0.8


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return max(lower, min(value, upper))


def clamp_health(value: float, max_health: float) -> float:
    """Health never drops below zero or rises above the maximum."""
    return clamp(value, 0.0, max_health)


def clamp_reduction(fraction: float) -> float:
    """A single attack can never be mitigated by more than 80%."""
    return clamp(fraction, 0.0, MAX_REDUCTION)


def floor_damage(value: float) -> float:
    """Damage is never negative."""
    return max(value, 0.0)


def safe_ratio(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Return numerator / denominator, or the default when the denominator is zero."""
    if denominator == 0:
        return default
    return numerator / denominator
