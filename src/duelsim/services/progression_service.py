"""Applies finished matches to the persisted character."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from duelsim.domain.entities import Character, Combatant
from duelsim.domain.progression import ProgressionResult, record_battle_result
from duelsim.services.character_store import CharacterStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProgressionUpdate:
    result: ProgressionResult
    character: Character


class ProgressionService:
    """Load, update, save and reload the character for one match outcome."""

    def __init__(self, store: CharacterStore) -> None:
        self._store = store

    def record_match(
        self,
        combatant: Combatant,
        *,
        won: bool,
    ) -> ProgressionUpdate | None:
        """Fold the combatant's match totals into the stored character.

        Returns None when no character is stored.
        """
        character = self._store.load_character()
        if character is None:
            logger.warning("No stored character; skipping progression for %s", combatant.name)
            return None

        result = record_battle_result(
            character,
            won=won,
            damage_dealt=combatant.damage_dealt,
            damage_taken=combatant.damage_taken,
        )
        self._store.save_character(character)

        refreshed = self._store.load_character() or character
        refresh_combatant(combatant, refreshed)
        logger.info(
            "%s gained %d experience (level %d -> %d)",
            refreshed.name,
            result.experience_gained,
            result.previous_level,
            result.new_level,
        )
        return ProgressionUpdate(result=result, character=refreshed)


def refresh_combatant(combatant: Combatant, character: Character) -> None:
    """Copy progression-facing fields from the persisted record."""
    combatant.level = character.level
    combatant.experience = character.experience
    combatant.total_bonus_points = character.total_bonus_points
