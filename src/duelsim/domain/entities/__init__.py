"""Runtime entity exports."""

from .character import Character
from .combatant import Combatant
from .stats import STAT_NAMES, CoreStats

__all__ = [
    "Character",
    "Combatant",
    "CoreStats",
    "STAT_NAMES",
]
