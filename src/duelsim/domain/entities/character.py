"""Persisted character record."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from duelsim.domain.rules import safe_ratio

from .stats import CoreStats

MAX_LEVEL = 50
BASE_STAT_ALLOWANCE = 25
STAT_POINTS_PER_LEVEL = 2


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class Character:
    """Long-term record that survives across matches."""

    name: str
    stats: CoreStats
    creation_date: datetime = field(default_factory=_utc_now)
    level: int = 1
    experience: int = 0
    total_bonus_points: int = 0
    bonus_points_spent: int = 0
    battles_won: int = 0
    battles_lost: int = 0
    total_damage_dealt: float = 0.0
    total_damage_taken: float = 0.0

    @property
    def total_stats(self) -> int:
        return self.stats.total

    @property
    def battles_played(self) -> int:
        return self.battles_won + self.battles_lost

    @property
    def win_rate(self) -> float:
        """Percentage of battles won; 0 when nothing has been played."""
        return safe_ratio(self.battles_won, self.battles_played) * 100

    @property
    def experience_to_next_level(self) -> int:
        return experience_threshold(self.level)

    @property
    def stat_allowance(self) -> int:
        return stat_allowance(self.level)

    @property
    def available_stat_points(self) -> int:
        return max(0, self.total_bonus_points - self.bonus_points_spent)

    @property
    def is_max_level(self) -> bool:
        return self.level >= MAX_LEVEL


def experience_threshold(level: int) -> int:
    """Experience needed to advance from ``level`` to the next one."""
    return level * 100 + 50


def stat_allowance(level: int) -> int:
    """Maximum stat total allowed at ``level``; grows with the points earned per level."""
    return BASE_STAT_ALLOWANCE + max(0, level - 1) * STAT_POINTS_PER_LEVEL
