"""Damage and mitigation formulas for a single attack direction."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Protocol, Sequence, Tuple

from duelsim.domain.abilities import AttackKind, DefenseKind
from duelsim.domain.entities import Combatant, CoreStats
from duelsim.domain.rules import clamp_reduction, floor_damage

BASE_DAMAGE = 10.0
STAT_BONUS_SCALE = 0.5
ENDURANCE_REDUCTION_PER_POINT = 0.02
DEFENSE_EFFECTIVENESS_SCALE = 0.3
DODGE_CHANCE_PER_AGILITY = 0.01
DODGE_REDUCTION = 0.5


class RandomSource(Protocol):
    def random(self) -> float: ...


@dataclass(frozen=True, slots=True)
class StatWeights:
    strength: float
    agility: float
    endurance: float
    wisdom: float
    intellect: float

    def apply(self, stats: CoreStats) -> float:
        return (
            stats.strength * self.strength
            + stats.agility * self.agility
            + stats.endurance * self.endurance
            + stats.wisdom * self.wisdom
            + stats.intellect * self.intellect
        )


# Each row sums to 0.5; endurance feeds health and mitigation instead of damage.
ATTACK_STAT_WEIGHTS: Dict[AttackKind, StatWeights] = {
    AttackKind.FIRE: StatWeights(strength=0.10, agility=0.05, endurance=0.0, wisdom=0.20, intellect=0.15),
    AttackKind.LIGHTNING: StatWeights(strength=0.05, agility=0.15, endurance=0.0, wisdom=0.15, intellect=0.15),
    AttackKind.WEAPON: StatWeights(strength=0.25, agility=0.15, endurance=0.0, wisdom=0.05, intellect=0.05),
    AttackKind.ACID: StatWeights(strength=0.10, agility=0.10, endurance=0.0, wisdom=0.15, intellect=0.15),
    AttackKind.PSYCHO: StatWeights(strength=0.05, agility=0.05, endurance=0.0, wisdom=0.20, intellect=0.20),
}

# defense -> attack -> effectiveness
DEFENSE_EFFECTIVENESS: Dict[DefenseKind, Dict[AttackKind, float]] = {
    DefenseKind.FIRE: {
        AttackKind.FIRE: 0.8,
        AttackKind.LIGHTNING: 0.2,
        AttackKind.WEAPON: 0.1,
        AttackKind.ACID: 0.3,
        AttackKind.PSYCHO: 0.1,
    },
    DefenseKind.LIGHTNING: {
        AttackKind.FIRE: 0.2,
        AttackKind.LIGHTNING: 0.8,
        AttackKind.WEAPON: 0.1,
        AttackKind.ACID: 0.2,
        AttackKind.PSYCHO: 0.3,
    },
    DefenseKind.WEAPON: {
        AttackKind.FIRE: 0.1,
        AttackKind.LIGHTNING: 0.1,
        AttackKind.WEAPON: 0.8,
        AttackKind.ACID: 0.4,
        AttackKind.PSYCHO: 0.1,
    },
    DefenseKind.ACID: {
        AttackKind.FIRE: 0.3,
        AttackKind.LIGHTNING: 0.2,
        AttackKind.WEAPON: 0.4,
        AttackKind.ACID: 0.8,
        AttackKind.PSYCHO: 0.2,
    },
    DefenseKind.PSYCHO: {
        AttackKind.FIRE: 0.1,
        AttackKind.LIGHTNING: 0.3,
        AttackKind.WEAPON: 0.1,
        AttackKind.ACID: 0.2,
        AttackKind.PSYCHO: 0.8,
    },
}


@dataclass(frozen=True, slots=True)
class AttackBreakdown:
    """Outcome of one attack kind against the defender."""

    attack: AttackKind
    base_damage: float
    reduction: float
    dodged: bool
    damage: float


@dataclass(frozen=True, slots=True)
class DamageResolution:
    """Total outbound damage for one direction plus the per-attack detail."""

    attacker_id: str
    defender_id: str
    total_damage: float
    breakdown: Tuple[AttackBreakdown, ...]

    @property
    def dodge_count(self) -> int:
        return sum(1 for entry in self.breakdown if entry.dodged)


def defense_effectiveness(attack: AttackKind, defense: DefenseKind) -> float:
    return DEFENSE_EFFECTIVENESS[defense][attack]


def compute_stat_bonus(attack: AttackKind, stats: CoreStats) -> float:
    return ATTACK_STAT_WEIGHTS[attack].apply(stats)


def compute_base_damage(attack: AttackKind, stats: CoreStats) -> float:
    return BASE_DAMAGE + STAT_BONUS_SCALE * compute_stat_bonus(attack, stats)


def dodge_chance(defender_stats: CoreStats) -> float:
    return defender_stats.agility * DODGE_CHANCE_PER_AGILITY


def roll_dodge(defender_stats: CoreStats, rng: RandomSource) -> bool:
    """One independent evasion roll."""
    return rng.random() < dodge_chance(defender_stats)


def compute_defense_reduction(
    attack: AttackKind,
    defender_stats: CoreStats,
    defenses: Sequence[DefenseKind],
    *,
    dodged: bool = False,
) -> float:
    """Mitigation fraction for one attack, clamped to [0, 0.8]."""
    reduction = defender_stats.endurance * ENDURANCE_REDUCTION_PER_POINT
    for defense in defenses:
        reduction += defense_effectiveness(attack, defense) * DEFENSE_EFFECTIVENESS_SCALE
    if dodged:
        reduction += DODGE_REDUCTION
    return clamp_reduction(reduction)


def compute_final_damage(base_damage: float, reduction: float) -> float:
    return floor_damage(base_damage * (1.0 - reduction))


def resolve_single_attack(
    attack: AttackKind,
    attacker: Combatant,
    defender: Combatant,
    rng: RandomSource,
) -> AttackBreakdown:
    base_damage = compute_base_damage(attack, attacker.stats)
    dodged = roll_dodge(defender.stats, rng)
    reduction = compute_defense_reduction(
        attack, defender.stats, defender.selected_defenses, dodged=dodged
    )
    return AttackBreakdown(
        attack=attack,
        base_damage=base_damage,
        reduction=reduction,
        dodged=dodged,
        damage=compute_final_damage(base_damage, reduction),
    )


def resolve_attack_damage(attacker: Combatant, defender: Combatant, rng: RandomSource) -> DamageResolution:
    """Sum independent per-attack rolls of ``attacker`` against ``defender``.

    Reads only stats and selections, never health, so both directions of a
    round can be resolved from the same snapshot.
    """
    breakdown = tuple(
        resolve_single_attack(attack, attacker, defender, rng) for attack in attacker.selected_attacks
    )
    return DamageResolution(
        attacker_id=attacker.combatant_id,
        defender_id=defender.combatant_id,
        total_damage=sum((entry.damage for entry in breakdown), 0.0),
        breakdown=breakdown,
    )
