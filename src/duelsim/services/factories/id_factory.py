"""Identifier helpers for combatants and matches."""
from __future__ import annotations

from duelsim.core.rng import RNG


def make_instance_id(prefix: str, rng: RNG) -> str:
    """Generate an identifier whose suffix is drawn from the provided RNG."""
    suffix = rng.randint(100000, 999999)
    return f"{prefix}_{suffix}"
