"""Core stat model shared by characters and combatants."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

STAT_NAMES = ("strength", "agility", "endurance", "wisdom", "intellect")


@dataclass(slots=True)
class CoreStats:
    """The five base stats every fighter is built from."""

    strength: int
    agility: int
    endurance: int
    wisdom: int
    intellect: int

    @property
    def total(self) -> int:
        return self.strength + self.agility + self.endurance + self.wisdom + self.intellect

    def as_dict(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in STAT_NAMES}

    def copy(self) -> "CoreStats":
        return CoreStats(**self.as_dict())
