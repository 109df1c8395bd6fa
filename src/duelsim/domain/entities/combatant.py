"""Live in-match combatant."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from duelsim.domain.abilities import AttackKind, DefenseKind
from duelsim.domain.rules import clamp_health

from .stats import CoreStats

BASE_HEALTH = 80.0
HEALTH_PER_ENDURANCE = 2.0
MAX_SELECTIONS = 2


@dataclass(slots=True)
class Combatant:
    """A participant in a match: stats, health, selections and match counters.

    ``health`` is clamped on every assignment and ``is_alive`` is derived from
    it on access, so the two can never disagree.
    """

    combatant_id: str
    name: str
    stats: CoreStats
    is_ai: bool = False
    selected_attacks: List[AttackKind] = field(default_factory=list)
    selected_defenses: List[DefenseKind] = field(default_factory=list)
    damage_dealt: float = 0.0
    damage_taken: float = 0.0
    rounds_won: int = 0
    level: int = 1
    experience: int = 0
    total_bonus_points: int = 0
    _health: float = field(default=0.0, init=False, repr=False)

    def __post_init__(self) -> None:
        self._health = self.max_health

    @property
    def max_health(self) -> float:
        return BASE_HEALTH + self.stats.endurance * HEALTH_PER_ENDURANCE

    @property
    def health(self) -> float:
        return self._health

    @health.setter
    def health(self, value: float) -> None:
        self._health = clamp_health(value, self.max_health)

    @property
    def is_alive(self) -> bool:
        return self._health > 0

    @property
    def total_stats(self) -> int:
        return self.stats.total

    @property
    def is_ready(self) -> bool:
        return (
            len(self.selected_attacks) == MAX_SELECTIONS
            and len(self.selected_defenses) == MAX_SELECTIONS
        )

    # -----------------------
    # Selections
    # -----------------------
    def select_attack(self, attack: AttackKind) -> bool:
        if attack in self.selected_attacks or len(self.selected_attacks) >= MAX_SELECTIONS:
            return False
        self.selected_attacks.append(attack)
        return True

    def deselect_attack(self, attack: AttackKind) -> bool:
        if attack not in self.selected_attacks:
            return False
        self.selected_attacks.remove(attack)
        return True

    def select_defense(self, defense: DefenseKind) -> bool:
        if defense in self.selected_defenses or len(self.selected_defenses) >= MAX_SELECTIONS:
            return False
        self.selected_defenses.append(defense)
        return True

    def deselect_defense(self, defense: DefenseKind) -> bool:
        if defense not in self.selected_defenses:
            return False
        self.selected_defenses.remove(defense)
        return True

    def set_selections(self, attacks: Sequence[AttackKind], defenses: Sequence[DefenseKind]) -> None:
        """Replace both selections at once, keeping only the first two distinct entries."""
        self.clear_selections()
        for attack in attacks:
            self.select_attack(attack)
        for defense in defenses:
            self.select_defense(defense)

    def clear_selections(self) -> None:
        self.selected_attacks.clear()
        self.selected_defenses.clear()

    # -----------------------
    # Damage bookkeeping
    # -----------------------
    def take_damage(self, amount: float) -> float:
        """Apply incoming damage and return the health actually lost."""
        incoming = max(amount, 0.0)
        actual = min(incoming, self._health)
        self.health = self._health - incoming
        self.damage_taken += actual
        return actual

    def deal_damage(self, amount: float) -> None:
        self.damage_dealt += max(amount, 0.0)

    def win_round(self) -> None:
        self.rounds_won += 1

    def reset_for_new_match(self) -> None:
        self._health = self.max_health
        self.damage_dealt = 0.0
        self.damage_taken = 0.0
        self.rounds_won = 0
        self.clear_selections()
