"""Factory helpers for runtime entities."""

from .combatant_factory import create_combatant_from_character, create_combatant_from_preset
from .id_factory import make_instance_id

__all__ = [
    "create_combatant_from_character",
    "create_combatant_from_preset",
    "make_instance_id",
]
