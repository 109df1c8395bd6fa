"""Experience, level-up and stat-point arithmetic for persisted characters."""
from __future__ import annotations

from dataclasses import dataclass

from duelsim.core.types import MatchOutcome, Side
from duelsim.domain.entities import Character
from duelsim.domain.entities.character import MAX_LEVEL, STAT_POINTS_PER_LEVEL, experience_threshold

WIN_BASE_EXPERIENCE = 80
WIN_DAMAGE_DIVISOR = 10
LOSS_BASE_EXPERIENCE = 20
LOSS_DAMAGE_DIVISOR = 20


@dataclass(frozen=True, slots=True)
class LevelUpResult:
    levels_gained: int
    points_granted: int
    experience_discarded: int


@dataclass(frozen=True, slots=True)
class ProgressionResult:
    won: bool
    experience_gained: int
    previous_level: int
    new_level: int
    level_up: LevelUpResult

    @property
    def leveled_up(self) -> bool:
        return self.level_up.levels_gained > 0


def experience_for_result(won: bool, damage_dealt: float) -> int:
    """Experience earned from one match."""
    dealt = max(damage_dealt, 0.0)
    if won:
        return WIN_BASE_EXPERIENCE + int(dealt // WIN_DAMAGE_DIVISOR)
    return LOSS_BASE_EXPERIENCE + int(dealt // LOSS_DAMAGE_DIVISOR)


def is_win(outcome: MatchOutcome, side: Side = "player1") -> bool:
    """Draws count as losses for progression."""
    return outcome == side


def apply_level_ups(character: Character) -> LevelUpResult:
    """Consume experience into levels until the next threshold is out of reach.

    At the level cap leftover experience is dropped.
    """
    levels_gained = 0
    while character.level < MAX_LEVEL and character.experience >= experience_threshold(character.level):
        character.experience -= experience_threshold(character.level)
        character.level += 1
        levels_gained += 1

    discarded = 0
    if character.level >= MAX_LEVEL and character.experience > 0:
        discarded = character.experience
        character.experience = 0

    points = levels_gained * STAT_POINTS_PER_LEVEL
    character.total_bonus_points += points
    return LevelUpResult(levels_gained=levels_gained, points_granted=points, experience_discarded=discarded)


def gain_experience(character: Character, amount: int) -> LevelUpResult:
    character.experience += max(0, amount)
    return apply_level_ups(character)


def record_battle_result(
    character: Character,
    *,
    won: bool,
    damage_dealt: float,
    damage_taken: float,
) -> ProgressionResult:
    """Fold one finished match into the character's lifetime record."""
    previous_level = character.level
    if won:
        character.battles_won += 1
    else:
        character.battles_lost += 1
    character.total_damage_dealt += max(damage_dealt, 0.0)
    character.total_damage_taken += max(damage_taken, 0.0)

    gained = experience_for_result(won, damage_dealt)
    level_up = gain_experience(character, gained)
    return ProgressionResult(
        won=won,
        experience_gained=gained,
        previous_level=previous_level,
        new_level=character.level,
        level_up=level_up,
    )
