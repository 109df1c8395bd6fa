"""Opponent decision system: strategy classification and weighted ability picks."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence, Tuple, TypeVar

from duelsim.core.rng import RNG
from duelsim.domain.abilities import ATTACK_ORDER, DEFENSE_ORDER, AttackKind, DefenseKind, matching_defense
from duelsim.domain.entities import Combatant

logger = logging.getLogger(__name__)

LOW_HEALTH_THRESHOLD = 30.0
STAT_ADVANTAGE_MARGIN = 5
PREDICTION_STAT_THRESHOLD = 7
PICK_COUNT = 2

JITTER_RANGE = (0.8, 1.2)
RANDOM_WEIGHT_RANGE = (0.5, 2.0)

OPPONENT_STAT_WEIGHT = 0.1
MAGIC_SELF_WEIGHT = 0.2
PHYSICAL_SELF_WEIGHT = 0.3
DIRECT_COUNTER_BONUS = 2.0
PARTIAL_COUNTER_BONUS = 0.5
ENDURANCE_DEFENSE_WEIGHT = 0.1

_MAGIC_ATTACKS = frozenset({AttackKind.FIRE, AttackKind.ACID, AttackKind.PSYCHO})
_PARTIAL_COUNTERS = frozenset({(DefenseKind.FIRE, AttackKind.ACID), (DefenseKind.ACID, AttackKind.FIRE)})

K = TypeVar("K", AttackKind, DefenseKind)


class AIStrategy(Enum):
    AGGRESSIVE = "aggressive"
    DEFENSIVE = "defensive"
    BALANCED = "balanced"
    ADAPTIVE = "adaptive"
    RANDOM = "random"


ATTACK_STRATEGY_FACTORS: Dict[AIStrategy, float] = {
    AIStrategy.AGGRESSIVE: 1.3,
    AIStrategy.DEFENSIVE: 0.7,
    AIStrategy.BALANCED: 1.0,
    AIStrategy.ADAPTIVE: 1.0,
}

DEFENSE_STRATEGY_FACTORS: Dict[AIStrategy, float] = {
    AIStrategy.AGGRESSIVE: 0.7,
    AIStrategy.DEFENSIVE: 1.5,
    AIStrategy.BALANCED: 1.0,
    AIStrategy.ADAPTIVE: 1.0,
}


@dataclass(frozen=True, slots=True)
class AISelection:
    """Two attacks and two defenses chosen for one round."""

    strategy: AIStrategy
    attacks: Tuple[AttackKind, ...]
    defenses: Tuple[DefenseKind, ...]
    predicted_attacks: Tuple[AttackKind, ...] = ()


def top_picks(weights: Dict[K, float], order: Sequence[K], count: int = PICK_COUNT) -> Tuple[K, ...]:
    """Highest weights first; equal weights keep enumeration order."""
    ranked = sorted(order, key=lambda kind: -weights[kind])
    return tuple(ranked[:count])


class OpponentStrategySelector:
    """Chooses an AI combatant's selections for the coming round.

    The selector holds no state; every random draw comes from the RNG passed
    in, which belongs to the match being played.
    """

    def select_abilities(
        self,
        ai: Combatant,
        opponent: Combatant,
        rng: RNG,
        *,
        strategy: AIStrategy | None = None,
    ) -> AISelection:
        chosen = strategy or self.determine_strategy(ai, opponent, rng)
        attack_weights = {
            attack: self.attack_weight(attack, ai, opponent, chosen, rng) for attack in ATTACK_ORDER
        }
        attacks = top_picks(attack_weights, ATTACK_ORDER)

        predicted = self.predict_opponent_attacks(opponent, rng)
        defense_weights = {
            defense: self.defense_weight(defense, predicted, ai, chosen, rng) for defense in DEFENSE_ORDER
        }
        defenses = top_picks(defense_weights, DEFENSE_ORDER)

        logger.debug(
            "AI %s picked %s/%s with %s strategy",
            ai.name,
            [attack.value for attack in attacks],
            [defense.value for defense in defenses],
            chosen.value,
        )
        return AISelection(
            strategy=chosen,
            attacks=attacks,
            defenses=defenses,
            predicted_attacks=tuple(predicted),
        )

    def apply_selection(self, ai: Combatant, opponent: Combatant, rng: RNG) -> AISelection:
        selection = self.select_abilities(ai, opponent, rng)
        ai.set_selections(selection.attacks, selection.defenses)
        return selection

    # -----------------------
    # Strategy
    # -----------------------
    def determine_strategy(self, ai: Combatant, opponent: Combatant, rng: RNG) -> AIStrategy:
        if ai.health < LOW_HEALTH_THRESHOLD:
            return AIStrategy.DEFENSIVE
        if opponent.health < LOW_HEALTH_THRESHOLD:
            return AIStrategy.AGGRESSIVE
        if ai.total_stats > opponent.total_stats + STAT_ADVANTAGE_MARGIN:
            return AIStrategy.AGGRESSIVE
        if opponent.total_stats > ai.total_stats + STAT_ADVANTAGE_MARGIN:
            return AIStrategy.DEFENSIVE
        return rng.choice([AIStrategy.BALANCED, AIStrategy.ADAPTIVE])

    # -----------------------
    # Weights
    # -----------------------
    def attack_weight(
        self,
        attack: AttackKind,
        ai: Combatant,
        opponent: Combatant,
        strategy: AIStrategy,
        rng: RNG,
    ) -> float:
        weight = 1.0
        if attack in _MAGIC_ATTACKS:
            weight += opponent.stats.wisdom * OPPONENT_STAT_WEIGHT
            weight += opponent.stats.intellect * OPPONENT_STAT_WEIGHT
            weight += ai.stats.wisdom * MAGIC_SELF_WEIGHT
            weight += ai.stats.intellect * MAGIC_SELF_WEIGHT
        elif attack is AttackKind.WEAPON:
            weight += opponent.stats.strength * OPPONENT_STAT_WEIGHT
            weight += ai.stats.strength * PHYSICAL_SELF_WEIGHT
        else:
            weight += opponent.stats.agility * OPPONENT_STAT_WEIGHT
            weight += ai.stats.agility * PHYSICAL_SELF_WEIGHT

        if strategy is AIStrategy.RANDOM:
            weight = rng.uniform(*RANDOM_WEIGHT_RANGE)
        else:
            weight *= ATTACK_STRATEGY_FACTORS[strategy]
        return weight * rng.uniform(*JITTER_RANGE)

    def defense_weight(
        self,
        defense: DefenseKind,
        predicted_attacks: Sequence[AttackKind],
        ai: Combatant,
        strategy: AIStrategy,
        rng: RNG,
    ) -> float:
        weight = 1.0
        for attack in predicted_attacks:
            if defense is matching_defense(attack):
                weight += DIRECT_COUNTER_BONUS
            elif (defense, attack) in _PARTIAL_COUNTERS:
                weight += PARTIAL_COUNTER_BONUS
        weight += ai.stats.endurance * ENDURANCE_DEFENSE_WEIGHT

        if strategy is AIStrategy.RANDOM:
            weight = rng.uniform(*RANDOM_WEIGHT_RANGE)
        else:
            weight *= DEFENSE_STRATEGY_FACTORS[strategy]
        return weight * rng.uniform(*JITTER_RANGE)

    # -----------------------
    # Prediction
    # -----------------------
    def predict_opponent_attacks(self, opponent: Combatant, rng: RNG) -> List[AttackKind]:
        predicted: List[AttackKind] = []
        if opponent.stats.strength > PREDICTION_STAT_THRESHOLD:
            predicted.append(AttackKind.WEAPON)
        if (
            opponent.stats.wisdom > PREDICTION_STAT_THRESHOLD
            or opponent.stats.intellect > PREDICTION_STAT_THRESHOLD
        ):
            predicted.extend([AttackKind.FIRE, AttackKind.PSYCHO])
        if opponent.stats.agility > PREDICTION_STAT_THRESHOLD:
            predicted.append(AttackKind.LIGHTNING)
        if not predicted:
            predicted = rng.sample(ATTACK_ORDER, PICK_COUNT)
        return predicted
