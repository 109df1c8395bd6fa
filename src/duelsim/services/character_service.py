"""Character creation, presets and stat-point allocation."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from duelsim.core.rng import RNG
from duelsim.data.repositories import PresetsRepository
from duelsim.domain.entities import STAT_NAMES, Character, Combatant, CoreStats
from duelsim.domain.entities.character import stat_allowance
from duelsim.services.character_store import CharacterStore
from duelsim.services.factories import create_combatant_from_character, create_combatant_from_preset

logger = logging.getLogger(__name__)

MIN_CREATION_STAT = 1
MAX_CREATION_STAT = 10
DEFAULT_STAT_VALUE = 5


@dataclass(frozen=True, slots=True)
class StatPointSummary:
    earned: int
    spent: int
    available: int
    allowance: int
    current_total: int


@dataclass(frozen=True, slots=True)
class CharacterResult:
    success: bool
    message: str
    character: Character | None = None


@dataclass(frozen=True, slots=True)
class StatSpendResult:
    success: bool
    message: str
    summary: StatPointSummary


def validate_creation_stats(stats: CoreStats, level: int = 1) -> str | None:
    """Return a message describing the first rule the stats break, or None."""
    for name in STAT_NAMES:
        value = getattr(stats, name)
        if not MIN_CREATION_STAT <= value <= MAX_CREATION_STAT:
            return f"{name} must be between {MIN_CREATION_STAT} and {MAX_CREATION_STAT}."
    allowance = stat_allowance(level)
    if stats.total > allowance:
        return f"Stat total {stats.total} exceeds the allowance of {allowance}."
    return None


def default_stats() -> CoreStats:
    return CoreStats(*(DEFAULT_STAT_VALUE,) * len(STAT_NAMES))


class CharacterService:
    """Create and grow the persisted character."""

    def __init__(self, *, store: CharacterStore, presets_repo: PresetsRepository) -> None:
        self._store = store
        self._presets_repo = presets_repo

    def load_character(self) -> Character | None:
        return self._store.load_character()

    def create_character(self, name: str, stats: CoreStats) -> CharacterResult:
        clean_name = name.strip()
        if not clean_name:
            return CharacterResult(success=False, message="Character name must not be empty.")
        problem = validate_creation_stats(stats)
        if problem:
            return CharacterResult(success=False, message=problem)
        character = Character(name=clean_name, stats=stats.copy())
        self._store.save_character(character)
        logger.info("Created character %s (%s)", clean_name, stats.as_dict())
        return CharacterResult(success=True, message=f"{clean_name} is ready for battle.", character=character)

    def create_from_preset(self, name: str, preset_id: str) -> CharacterResult:
        try:
            preset = self._presets_repo.get(preset_id)
        except KeyError:
            return CharacterResult(success=False, message=f"Unknown preset '{preset_id}'.")
        return self.create_character(name, preset.stats)

    def delete_character(self) -> None:
        self._store.delete_character()

    # -----------------------
    # Stat points
    # -----------------------
    def get_stat_points_summary(self, character: Character) -> StatPointSummary:
        return StatPointSummary(
            earned=character.total_bonus_points,
            spent=character.bonus_points_spent,
            available=character.available_stat_points,
            allowance=character.stat_allowance,
            current_total=character.total_stats,
        )

    def spend_stat_point(self, character: Character, stat: str) -> StatSpendResult:
        if stat not in STAT_NAMES:
            return StatSpendResult(
                success=False,
                message="Invalid stat selection.",
                summary=self.get_stat_points_summary(character),
            )
        if character.available_stat_points <= 0:
            return StatSpendResult(
                success=False,
                message="No stat points available.",
                summary=self.get_stat_points_summary(character),
            )
        setattr(character.stats, stat, getattr(character.stats, stat) + 1)
        character.bonus_points_spent += 1
        self._store.save_character(character)
        return StatSpendResult(
            success=True,
            message=f"{stat} increased to {getattr(character.stats, stat)}.",
            summary=self.get_stat_points_summary(character),
        )

    # -----------------------
    # Combatants
    # -----------------------
    def build_combatant(self, character: Character, rng: RNG) -> Combatant:
        return create_combatant_from_character(character, rng)

    def build_preset_combatant(self, preset_id: str, name: str, rng: RNG, *, is_ai: bool = False) -> Combatant:
        return create_combatant_from_preset(preset_id, name, self._presets_repo, rng, is_ai=is_ai)
