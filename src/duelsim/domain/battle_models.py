"""Battle domain models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from duelsim.core.rng import RNG
from duelsim.core.scheduler import ScheduledCall
from duelsim.core.types import GameMode, MatchOutcome, MatchPhase
from duelsim.domain.abilities import AttackKind, DefenseKind
from duelsim.domain.damage import AttackBreakdown
from duelsim.domain.entities import Combatant


@dataclass(frozen=True, slots=True)
class RoundResult:
    """Structured summary of one resolved round."""

    round_number: int
    player1_attacks: Tuple[AttackKind, ...]
    player1_defenses: Tuple[DefenseKind, ...]
    player2_attacks: Tuple[AttackKind, ...]
    player2_defenses: Tuple[DefenseKind, ...]
    player1_damage_dealt: float
    player2_damage_dealt: float
    player1_health_after: float
    player2_health_after: float
    player1_breakdown: Tuple[AttackBreakdown, ...] = ()
    player2_breakdown: Tuple[AttackBreakdown, ...] = ()
    round_winner_id: str | None = None


@dataclass(slots=True)
class MatchState:
    """Tracks one match from setup to result. Owns its RNG."""

    match_id: str
    mode: GameMode
    player1: Combatant
    player2: Combatant
    rng: RNG
    seed: int | None = None
    phase: MatchPhase = "setup"
    round_number: int = 1
    round_results: List[RoundResult] = field(default_factory=list)
    outcome: MatchOutcome | None = None
    winner_id: str | None = None
    character_bound: bool = False
    progression_applied: bool = False
    pending_ai_call: ScheduledCall | None = None

    @property
    def is_over(self) -> bool:
        return self.phase == "result"

    @property
    def last_round(self) -> RoundResult | None:
        return self.round_results[-1] if self.round_results else None

    def combatants(self) -> Tuple[Combatant, Combatant]:
        return self.player1, self.player2

    def is_human(self, combatant: Combatant) -> bool:
        """In pve player2 is computer-controlled; in pvp both sides are human."""
        return not (self.mode == "pve" and combatant is self.player2)
