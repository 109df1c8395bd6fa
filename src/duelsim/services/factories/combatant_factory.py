"""Factories for live combatants."""
from __future__ import annotations

from duelsim.core.rng import RNG
from duelsim.data.repositories import PresetsRepository
from duelsim.domain.entities import Character, Combatant
from duelsim.services.errors import FactoryError

from .id_factory import make_instance_id


def create_combatant_from_character(character: Character, rng: RNG, *, is_ai: bool = False) -> Combatant:
    """Build a fresh combatant carrying the character's stats and progression."""
    return Combatant(
        combatant_id=make_instance_id("combatant", rng),
        name=character.name,
        stats=character.stats.copy(),
        is_ai=is_ai,
        level=character.level,
        experience=character.experience,
        total_bonus_points=character.total_bonus_points,
    )


def create_combatant_from_preset(
    preset_id: str,
    name: str,
    presets_repo: PresetsRepository,
    rng: RNG,
    *,
    is_ai: bool = False,
) -> Combatant:
    """Build a combatant from a named stat preset."""
    try:
        preset = presets_repo.get(preset_id)
    except KeyError as exc:
        raise FactoryError(f"Preset '{preset_id}' not found.") from exc
    return Combatant(
        combatant_id=make_instance_id("combatant", rng),
        name=name,
        stats=preset.stats.copy(),
        is_ai=is_ai,
    )
